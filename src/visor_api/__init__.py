"""
Visor API package.

Local HTTP API over the single JSON document shared with the Visor desktop
shell. ``visor_api.main.app`` is the ASGI application; ``visor_api.main.create_app``
builds one around an explicit DocumentService.
"""

__version__ = "0.1.0"
