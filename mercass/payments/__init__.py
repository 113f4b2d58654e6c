"""
The `payments` package wraps the iyzico SDK.

It only shapes data: subscription rows, card, buyer and billing payloads
become an iyzico payment request; the SDK performs the call.
"""
