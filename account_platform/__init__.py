"""Account platform - backend and session client.

- REST API for user accounts: registration, login, identity lookup, account CRUD.
- Stateless JWT sessions; the server stores only password hashes.
- A small synchronous session client that persists the token locally,
  rehydrates on startup and gates protected views.

See README for setup and usage.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
