"""
The `daos` package provides the reads and writes shared by several routes.

Each DAO wraps the `QueryExecutor` and speaks in structured commands, so
no route builds SQL text itself.

Contents
--------
- ProfileDao
    Reads the per-request user context:
    * Profile rows from `v_UsersProfiles`
    * Navigation categories from `v_MenuCategories`
    * Followed categories from `v_UsersCategories`

- ChatDao
    Manages buyer/seller chats:
    * Lists a user's chats and opens new ones for a product
    * Fetches messages grouped by day, with attachments and seller info
    * Marks chats read/unread, deletes them, answers with optional files
"""
