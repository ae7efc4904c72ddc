"""Base error for conditions that must stop the release run.

Subclasses live next to the code that raises them.  The CLI turns any
``PublishError`` into a diagnostic and a non-zero exit.
"""


class PublishError(RuntimeError):
    """A fatal publishing error.  Never caught and ignored."""
