"""
Route modules of the storefront.

Contents
--------
auth : Login, logout, OTP and the login pages.
account : Profile lookup and the "my account" updates.
pages : Server-rendered pages.
users, categories, sliders, references, products, sellers : JSON resources.
forum : Forum posts, drafts, likes, comments and images.
chat : Buyer/seller chat.
subscriptions : Subscription plans, newsletter and payment.
"""

from mercass.api.routes import (
    account,
    auth,
    categories,
    chat,
    forum,
    pages,
    products,
    references,
    sellers,
    sliders,
    subscriptions,
    users,
)

ROUTERS = [
    auth.router,
    account.router,
    pages.router,
    users.router,
    categories.router,
    sliders.router,
    references.router,
    products.router,
    sellers.router,
    forum.router,
    chat.router,
    subscriptions.router,
]
