"""
Customer Module

Customer records, the contact-number rule applied when a new customer is
admitted to the bank, and the single-line rule for every customer field.
"""

from dataclasses import dataclass
import re

from .exceptions import InvalidContactError, InvalidCustomerError

# 10 digits, leading digit 6-9
CONTACT_PATTERN = re.compile(r'[6-9][0-9]{9}')


@dataclass(frozen=True)
class Customer:
    """
    Immutable customer record

    Customers are identified by exact (case-sensitive) name inside a bank.
    """
    name: str
    address: str
    contact: str


def is_valid_contact(contact: str) -> bool:
    """Check that a contact is exactly 10 digits starting with 6, 7, 8 or 9"""
    return isinstance(contact, str) and CONTACT_PATTERN.fullmatch(contact) is not None


def validate_contact(contact: str) -> str:
    """
    Validate a customer contact number

    Raises:
        InvalidContactError: If the contact does not satisfy the rule
    """
    if not is_valid_contact(contact):
        raise InvalidContactError(
            "Customer contact must be exactly 10 digits and start with 6, 7, 8, or 9."
        )
    return contact


def is_single_line(value: str) -> bool:
    """Check that a value holds no line boundary of any kind (\\n, \\x0c, \\u2028, ...)"""
    return value == "" or value.splitlines() == [value]


def normalize_customer(customer: Customer) -> Customer:
    """
    Return the customer with surrounding whitespace removed from every field

    Raises:
        InvalidCustomerError: If a field spans more than one line
    """
    fields = {}
    for label, value in (("name", customer.name),
                         ("address", customer.address),
                         ("contact", customer.contact)):
        if not isinstance(value, str) or not is_single_line(value):
            raise InvalidCustomerError(f"Customer {label} must be a single line of text.")
        fields[label] = value.strip()

    normalized = Customer(**fields)
    return customer if normalized == customer else normalized
