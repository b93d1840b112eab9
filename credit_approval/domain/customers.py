"""Customer registration"""

from credit_approval.domain.models import Customer
from credit_approval.domain.exceptions import NotFoundError, ConflictError
from credit_approval.domain.ports import CustomerStore


def calculate_approved_limit(monthly_income: float, multiplier: int = 36) -> float:
    """Maximum aggregate principal a customer may be extended"""
    return round(monthly_income * multiplier, 2)


class CustomerService:
    """Registers customers and fixes their approved limit at sign-up"""

    def __init__(self, customers: CustomerStore, approved_limit_multiplier: int = 36):
        self.customers = customers
        self.approved_limit_multiplier = approved_limit_multiplier

    def register_customer(
        self,
        first_name: str,
        last_name: str,
        age: int,
        phone_number: str,
        monthly_income: float,
    ) -> Customer:
        """
        Raises:
            ConflictError: Phone number already registered
        """
        if self.customers.get_customer_by_phone(phone_number) is not None:
            raise ConflictError(f"Phone number {phone_number} already registered")

        return self.customers.create_customer(
            first_name=first_name,
            last_name=last_name,
            age=age,
            phone_number=phone_number,
            monthly_income=monthly_income,
            approved_limit=calculate_approved_limit(monthly_income, self.approved_limit_multiplier),
        )

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.customers.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer
