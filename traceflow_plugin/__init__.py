# traceflow_plugin/__init__.py
"""
Traceflow Plugin Package Initialization

Antrea Traceflow plugin for the Kubernetes dashboard: start traces between
pods, list them and draw their paths.
"""

# Package metadata
__version__ = "0.1.0"
__description__ = "Antrea Traceflow plugin for the Kubernetes dashboard"

__all__ = [
    "get_version",
    "main",
    "__version__"
]


def get_version():
    """
    Get the current version of the plugin package.

    Returns:
        str: The version string in format "major.minor.patch"
    """
    return __version__


def main():
    """
    Entry point when the package is run as a module.
    """
    from .cli import app
    return app()
