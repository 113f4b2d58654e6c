"""
The `storage` package keeps uploaded files.

Uploads live under `<feature>/<ownerId>/<filename>` below the configured
root and are served through the CDN base (`FE_CDN_LINK`).
"""
