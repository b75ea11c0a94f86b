"""Grupos de recursos de la API.

Por qué un paquete:
- Agrupa operaciones por recurso (productos, afiliados, suscripciones...).
- Cada grupo recibe el cliente por composición y solo usa `client.request`.
"""

from thrivecart.adapters.resources.affiliates import AffiliatesResource
from thrivecart.adapters.resources.catalog import CatalogResource
from thrivecart.adapters.resources.customers import CustomersResource
from thrivecart.adapters.resources.events import EventsResource
from thrivecart.adapters.resources.refunds import RefundsResource
from thrivecart.adapters.resources.subscriptions import SubscriptionsResource
from thrivecart.adapters.resources.transactions import TransactionsResource

__all__ = [
    "AffiliatesResource",
    "CatalogResource",
    "CustomersResource",
    "EventsResource",
    "RefundsResource",
    "SubscriptionsResource",
    "TransactionsResource",
]
