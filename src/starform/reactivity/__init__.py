"""
Reactivity - Observable Stores for Form State

Structure:
- store.py: writable, derived and read-only stores with replay-on-subscribe

Example:
    from starform.reactivity import writable, derived

    values = writable({"email": ""})
    filled = derived(values, lambda form: bool(form["email"]))
    filled.subscribe(print)   # prints False immediately
"""

from .store import Readable, Writable, Derived, writable, derived, get, batch

__all__ = ["Readable", "Writable", "Derived", "writable", "derived", "get", "batch"]
