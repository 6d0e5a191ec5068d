"""
Vidly Backend — Customer Service
"""

from typing import Any, List

from pymongo.asynchronous.database import AsyncDatabase

from vidly.exceptions import NotFoundError
from vidly.repositories import CustomerRepository
from vidly.schemas.customer import CustomerIn, CustomerOut
from vidly.validation import parse_payload


def _to_document(data: CustomerIn) -> dict:
    return {"name": data.name, "isGold": data.is_gold, "phone": data.phone}


class CustomerService:

    async def list_customers(self, db: AsyncDatabase) -> List[CustomerOut]:
        customers = await CustomerRepository(db).list()
        return [CustomerOut.model_validate(c) for c in customers]

    async def get_customer(self, db: AsyncDatabase, customer_id: str) -> CustomerOut:
        customer = await CustomerRepository(db).get(customer_id)
        if customer is None:
            raise NotFoundError(resource="customer", resource_id=customer_id)
        return CustomerOut.model_validate(customer)

    async def create_customer(self, db: AsyncDatabase, payload: Any) -> CustomerOut:
        data = parse_payload(CustomerIn, payload)
        customer = await CustomerRepository(db).create(_to_document(data))
        return CustomerOut.model_validate(customer)

    async def replace_customer(self, db: AsyncDatabase, customer_id: str, payload: Any) -> CustomerOut:
        data = parse_payload(CustomerIn, payload)
        customer = await CustomerRepository(db).replace(customer_id, _to_document(data))
        if customer is None:
            raise NotFoundError(resource="customer", resource_id=customer_id)
        return CustomerOut.model_validate(customer)

    async def delete_customer(self, db: AsyncDatabase, customer_id: str) -> CustomerOut:
        customer = await CustomerRepository(db).delete(customer_id)
        if customer is None:
            raise NotFoundError(resource="customer", resource_id=customer_id)
        return CustomerOut.model_validate(customer)


customer_service = CustomerService()
