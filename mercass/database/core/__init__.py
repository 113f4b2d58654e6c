"""
The `core` package turns request data into store calls.

Contents
--------
- commands
    `Procedure`, `ViewQuery`, `Statement`, `Batch` and `QueryResult`.
- executor
    `QueryExecutor` running commands against the shared engine.
- params
    `ProcedureSignature`, `Param`, `build_params` and the
    parse-or-default helpers.
"""
