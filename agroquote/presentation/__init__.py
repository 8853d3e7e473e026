# agroquote/presentation/__init__.py
