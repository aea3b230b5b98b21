# filestore/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=409)


class StorageError(AppError):
    def __init__(self, message: str = "Storage failure") -> None:
        super().__init__(message, status_code=500)


class DirectoryError(StorageError):
    def __init__(self, directory: str, message: str) -> None:
        super().__init__(message)
        self.directory = directory


class CopyFileError(StorageError):
    def __init__(self, source: str, target: str, reason: str) -> None:
        super().__init__(f"Não foi possível copiar o arquivo '{source}' para '{target}' ({reason}).")
        self.source = source
        self.target = target
        self.reason = reason


class MoveFileError(StorageError):
    def __init__(self, source: str, target: str, reason: str) -> None:
        super().__init__(f"Não foi possível mover o arquivo '{source}' para '{target}' ({reason}).")
        self.source = source
        self.target = target
        self.reason = reason
