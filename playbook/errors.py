class SourceUnavailableError(Exception):
    """Error raised when the playbook source file cannot be located, read or decoded."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        self.message = f"Playbook source is unavailable - path={path}"
        if reason:
            self.message += f", reason={reason}"
        super().__init__(self.message)
