"""Domain-specific exceptions for contacts services."""
from rest_framework import status

from apps.common.exceptions import ServiceError


class ContactsServiceError(ServiceError):
    """Base exception for contacts services."""
    pass


class CustomerNotFoundError(ContactsServiceError):
    """Customer not found."""
    status_code = status.HTTP_404_NOT_FOUND


class SellerNotFoundError(ContactsServiceError):
    """Seller not found."""
    status_code = status.HTTP_404_NOT_FOUND


class InvalidContactError(ContactsServiceError):
    """Contact data is invalid."""
    pass


class DuplicateWhatsAppError(ContactsServiceError):
    """WhatsApp number already belongs to another contact."""
    pass


class ContactInUseError(ContactsServiceError):
    """Raised when deleting a contact that orders still reference."""
    pass


class InvalidImportFileError(ContactsServiceError):
    """Uploaded CSV is missing or has no usable header."""
    pass


class ImportFileTooLargeError(ContactsServiceError):
    """Uploaded CSV exceeds the size limit."""
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
