"""
The `config` package holds the application settings.

Contents
--------
- config
    `Settings` (pydantic-settings) read from the environment or `.env`,
    and the cached `get_settings` accessor.
"""
