"""
Live field-schedule view.

Loads one snapshot of an event over HTTP, keeps its team roster current from
push updates, and re-derives the per-round schedule after every change.
"""
import os

API_URL = os.getenv("LEMS_API_URL", "http://localhost:3333")
WS_URL = os.getenv("LEMS_WS_URL", API_URL.replace("http", "ws", 1))
