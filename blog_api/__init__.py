"""
django-blog-api - A JSON API for a small blogging platform.

Features:
- Registration and login with signed bearer tokens
- Paginated post listing with search and category filters
- Comments owned by their post, deletable only by their author
- Featured image uploads through Django's storage API
"""

__version__ = "0.1.0"
