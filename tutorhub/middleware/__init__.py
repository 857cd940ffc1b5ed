# Middleware package init
"""
TutorHub Backend — Middleware Package
======================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id.
"""
