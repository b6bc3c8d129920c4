"""
Thin accessors over the SQLModel session.

Routes go through these helpers so every collection is read and written the
same way; none of them commit partial state on failure.
"""
