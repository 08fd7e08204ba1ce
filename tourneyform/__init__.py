"""Tournament registration form engine.

tourneyform validates a player registration form field by field and, once
every rule passes, composes a pre-filled message and hands it to a messaging
service as a deep link. It provides:
- A single rule table shared by blur-time and submit-time validation
- Structured field errors with specific codes and the form's own messages
- Deterministic message composition from a snapshot of the form
- Fire-and-forget dispatch through an injectable link opener
- Auto-dismissing error notices and an event stream for UI bindings

Basic usage:
    >>> from tourneyform.runtime import RegistrationRuntime
    >>> runtime = RegistrationRuntime()
    >>> runtime.on_field_input("email", "a.com")
    >>> runtime.on_field_blur("email").message
    'Please enter a valid email address.'
"""

__version__ = "0.1.0"
__author__ = "Taigours E-Sports"

# Version info
VERSION = (0, 1, 0)

# Core exports
from tourneyform.config import RegistrationConfig
from tourneyform.runtime import RegistrationRuntime, SubmissionOutcome

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "RegistrationConfig",
    "RegistrationRuntime",
    "SubmissionOutcome",
]
