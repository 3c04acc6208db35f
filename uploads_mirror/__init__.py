"""
Uploads Mirror - keeps a local media library mirrored into an object store.

This package contains the complete service:
- core: Framework-agnostic mirror logic (keys, paths, engine)
- events: Host lifecycle hooks and the bindings that subscribe the engine
- infrastructure: Object store integration
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
