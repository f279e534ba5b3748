# src/xcstream/cli/__init__.py
