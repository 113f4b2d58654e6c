"""
The `database` package is the boundary to the relational store.

Contents
--------
- config
    Application settings (pydantic-settings).
- core
    Structured commands, the pooled query executor and procedure
    parameter lists.
- entities
    Shapes of the records passed through the application.
- daos
    Reads shared by the request pipeline (profile, menu, chat).
"""
