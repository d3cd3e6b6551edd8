# Routes package init
"""
Noteful API — API Routes Package
================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - users.py:   POST   /api/users              (register)
    - auth.py:    POST   /api/login              (username/password → JWT)
                  POST   /api/refresh            (JWT → fresh JWT)
    - notes.py:   GET    /api/notes              (list, filter, search)
                  GET    /api/notes/{id}
                  POST   /api/notes
                  PUT    /api/notes/{id}
                  DELETE /api/notes/{id}
    - folders.py: same five operations under /api/folders
    - tags.py:    same five operations under /api/tags
    - health.py:  GET    /health

Routes are thin: they extract input, resolve the current user and the
database session, call a service, and set status codes and headers.
Everything under /api/notes, /api/folders and /api/tags requires a bearer
token (router-level dependency).
"""
