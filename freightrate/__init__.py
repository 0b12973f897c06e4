# freightrate/__init__.py
