# Services package init
"""
Noteful API — Services Layer
============================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive a database session plus already-parsed input, apply
       validation and ownership rules, and return response schemas. They
       raise NotefulError subclasses; they never build HTTP responses.

Service Inventory:
    - UserService:   registration (field checks, uniqueness, password hashing)
    - AuthService:   login and token refresh
    - NoteService:   note CRUD with folder/tag ownership checks
    - FolderService: folder CRUD; detaches notes on delete
    - TagService:    tag CRUD; strips the tag from notes on delete
    - references:    id parsing and the concurrent ownership checks
"""
