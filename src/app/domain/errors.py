from __future__ import annotations


class ContentError(Exception):
    pass


class ValidationError(ContentError):
    pass


class InvalidStatusError(ValidationError):
    def __init__(self, status: object):
        super().__init__("Invalid status")
        self.status = status


class InvalidCategoryError(ValidationError):
    def __init__(self, category: object):
        super().__init__("Invalid category")
        self.category = category


class InvalidMediaTypeError(ValidationError):
    def __init__(self, media_type: object):
        super().__init__("Invalid media type")
        self.media_type = media_type


class UnauthorizedError(ContentError):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(ContentError):
    pass


class RecipeNotFoundError(NotFoundError):
    def __init__(self, recipe_id: int):
        super().__init__("Recipe not found")
        self.recipe_id = recipe_id


class FamilyItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int):
        super().__init__("Entry not found")
        self.item_id = item_id


class ConfigurationError(ContentError):
    def __init__(self, message: str = "Admin credentials missing on server"):
        super().__init__(message)


class StorageError(ContentError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Storage error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
