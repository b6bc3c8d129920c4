"""Push channel: per-event rooms and the named update categories sent through them."""
