"""
Auth package for the link shortener.

Plays the identity collaborator: resolves HTTP Basic credentials to an
opaque user id. Nothing downstream sees usernames or passwords, only the id.
"""
