"""Front ends: PySide6 desktop window and Flask web server."""
