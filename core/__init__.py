# switchboard/core/__init__.py
