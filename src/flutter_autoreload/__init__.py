"""
Flutter Auto-Reload - hot reload `flutter run` whenever Dart sources change.

This package runs the Flutter toolchain's interactive `run` command as a
child process and:
- Watches the project directory for changes to `.dart` files
- Sends the hot-reload command to the child, debounced
- Forwards every terminal keystroke to the child unchanged
- Kills the child on every exit path
"""

__version__ = "0.1.0"
