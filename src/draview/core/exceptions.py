class DraViewError(Exception):
    """Base exception for draview."""

    pass


class FetchError(DraViewError):
    """Raised when one of the cluster collections cannot be listed."""

    def __init__(self, collection: str, cause: BaseException | str):
        self.collection = collection
        self.cause = cause
        super().__init__(f"failed to list {collection}: {cause}")


class KubeConfigError(FetchError):
    """Raised when no usable Kubernetes configuration could be loaded."""

    pass
