"""Server-side HTTP sessions with pluggable storage providers.

Run the demo service with::

    uvicorn --factory sessionmanager.main:create_app
"""

__version__ = "0.1.0"
