class StructuralValidationError(ValueError):
    """ Raised when a sampler state, or one of its components, violates a structural invariant.

    A rejected proposal is an expected outcome during sampling so the error only carries a message naming the violated
    invariant.
    """
