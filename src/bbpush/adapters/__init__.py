"""Adapters that connect the bbpush core to storage, events, and delivery."""
