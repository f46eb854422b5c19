"""
rolenotes: personal notes with role-based access control.

- backend/: API, note service, repositories, database, configuration
"""
