"""
Preview Service Libraries Package.

Shared infrastructure for the markdown preview services: structured
logging, settings base classes and the error handling framework.
"""

# Framework-specific error handlers should be imported directly from:
# - preview_service_libs.error_handling.fastapi
