# src/smartctl/__init__.py - v1
