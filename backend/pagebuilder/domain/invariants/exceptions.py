class InvariantViolation(Exception):
    """Raised when submitted data breaks a domain rule."""
