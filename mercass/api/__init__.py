"""
The `api` package defines the storefront's HTTP interface, along with the
request pipeline stages and response shaping it relies on.

It integrates FastAPI routing, session validation through the external
auth service and Jinja2 page rendering. Every route ends in one store
command (or a few, for pages) built from structured descriptors.

Contents
--------
- routes
    One router per resource family:
        * Login, logout, OTP and "my account" endpoints
        * Server-rendered pages
        * Users, categories, sliders, references, products and sellers
        * Forum, chat, subscriptions and payment

- dependencies
    The session context middleware as FastAPI dependencies:
        * `require_session` validates the `Auth` cookie
        * `with_profile`, `with_user_categories`, `with_menu` add user context

- procedure_routes
    Table-driven registration of view reads and stored procedure calls.

- auth_client, device
    Auth service client and the device fingerprint sent at login.

- envelope, rendering, models
    JSON result shapes, the page envelope, and pydantic request bodies.
"""
