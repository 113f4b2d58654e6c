"""
The `entities` package defines the shapes of the records this application
passes through. The store owns the schema; these models only describe
what crosses the process boundary.

Contents
--------
- session
    `SessionInfo`, `AuthResponse`, `LoginPayload`: the auth service contract.
    * Session fingerprint sent at login (device, IP, `ValidHash`)
    * Session object returned by `/auth` and `/check`
"""
