# olimpiadas/core/errors.py
"""
Typed HTTP errors raised by services.

Each failure the frontend needs to tell apart (missing profile vs missing
fee, closed registration...) gets its own subclass. They are still plain
HTTPExceptions, so FastAPI renders them as {"detail": message}.
"""

from fastapi import HTTPException, status


class EventNotFoundError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )


class ProfileNotFoundError(HTTPException):
    def __init__(self, detail: str = "Profile not found for this event") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UserNotFoundError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )


class RegistrationFeeNotFoundError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Registration fee not found for this event",
        )


class PaymentNotFoundError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Payment not found",
        )


class RegistrationClosedError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Registrations are closed for this event",
        )


class InvalidDependentAgeError(HTTPException):
    def __init__(self, age: int) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid age for dependent registration: {age}",
        )
        self.age = age


class ExclusiveProfileConflictError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user can hold only one of Atleta / Público Geral per event",
        )


class IdentifierConflictError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="Payment identifier already taken, please retry",
        )


class DependentNotOwnedError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Dependent is not registered by this user",
        )


class DependentBirthDateMismatchError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="birth_date does not match the dependent's record",
        )
