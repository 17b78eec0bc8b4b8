# Controllers package init
"""
Notes API — Controllers Layer
=============================

What:  Request handling for each resource, independent of HTTP plumbing.
Why:   Routes stay thin (extract validated input, call a controller); the
       business rules live here and are testable without a server.
How:   Each controller receives its repositories through the constructor
       and returns envelope responses.

Controller Inventory:
    - base.py:     BaseController (envelope helpers, failure wrapping)
    - users.py:    UserController
    - notes.py:    NoteController
    - health.py:   HealthController (/health, /ping, API info)

Template shared by every endpoint:
    1. Take already-validated input
    2. Precondition reads (referenced entity exists, unique field is free)
    3. One repository write
    4. Map the result to an envelope

Modeled outcomes (not found, conflict) become 404/409 envelopes. Anything
else is logged with its traceback and re-raised as OperationalError with a
fixed message, so no internal detail reaches the client.
"""

from notes_api.controllers.base import BaseController
from notes_api.controllers.health import HealthController
from notes_api.controllers.notes import NoteController
from notes_api.controllers.users import UserController

__all__ = ["BaseController", "HealthController", "NoteController", "UserController"]
