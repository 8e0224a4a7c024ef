"""Authentication.

Learn: Users authenticate with email/password and receive JWT
access/refresh tokens. Every protected route resolves the bearer token
to a "current identity", and only accepts it while the user still
exists and is active.
"""
