class StoredFileNotFound(Exception):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"File {name} not found.")


class InvalidPath(Exception):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid file name {name!r}.")


class NoPayload(Exception):
    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message)


class PayloadTooLarge(Exception):
    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(f"File exceeds the maximum upload size of {max_bytes} bytes.")


class StorageWriteFailure(Exception):
    def __init__(self, name: str, reason: str | None = None):
        self.name = name
        message = f"Failed to write file {name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StorageReadFailure(Exception):
    def __init__(self, reason: str | None = None):
        message = "Failed to read the storage directory"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
