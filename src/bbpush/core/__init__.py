"""Core domain package for bbpush.

Core contains classification, payload extraction, target resolution, and the
insertion gate without any WordPress, SQLite, or delivery-specific code,
keeping the business logic portable.
"""
