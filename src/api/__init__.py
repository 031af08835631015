# File: src/api/__init__.py
