"""View models built from the server's JSON."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

ADMIN_ROLE = 'super_admin'
ORDER_TAKER_ROLES = ('order_taker', 'order_taker_crew')
CREW_ROLES = ('crew', 'order_taker_crew')


def to_decimal(value) -> Decimal:
    if value is None or value == '':
        return Decimal('0.00')
    return Decimal(str(value)).quantize(Decimal('0.01'))


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str = ''
    role: str = 'crew'
    branch_access: tuple = ()
    preferred_branch: str | None = None

    @classmethod
    def from_wire(cls, data):
        return cls(
            id=str(data['id']),
            email=data['email'],
            name=data.get('name') or '',
            role=data.get('role', 'crew'),
            branch_access=tuple(data.get('branch_access') or ()),
            preferred_branch=data.get('preferred_branch'),
        )

    def to_wire(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'branch_access': list(self.branch_access),
            'preferred_branch': self.preferred_branch,
        }

    @property
    def is_admin(self):
        return self.role == ADMIN_ROLE

    @property
    def is_order_taker(self):
        return self.role in ORDER_TAKER_ROLES

    @property
    def is_crew(self):
        return self.role in CREW_ROLES

    def can_access_branch(self, branch_id):
        """An empty access list means every branch."""
        return self.is_admin or not self.branch_access or branch_id in self.branch_access


@dataclass(frozen=True)
class OrderItem:
    id: str
    name: str
    price: Decimal
    quantity: int = 1
    status: str = 'pending'
    note: str = ''

    @classmethod
    def from_wire(cls, data):
        return cls(
            id=str(data['id']),
            name=data['name'],
            price=to_decimal(data.get('price')),
            quantity=int(data.get('quantity', 1)),
            status=data.get('status', 'pending'),
            note=data.get('note') or '',
        )

    @property
    def line_total(self):
        return self.price * self.quantity


@dataclass(frozen=True)
class AppendedOrder:
    id: str
    items: tuple = ()
    is_paid: bool = False
    payment_method: str | None = None

    @classmethod
    def from_wire(cls, data):
        return cls(
            id=str(data['id']),
            items=tuple(OrderItem.from_wire(item) for item in data.get('items', ())),
            is_paid=bool(data.get('is_paid')),
            payment_method=data.get('payment_method'),
        )

    @property
    def subtotal(self):
        return sum((item.line_total for item in self.items), Decimal('0.00'))


@dataclass(frozen=True)
class Order:
    id: str
    order_number: int
    customer_name: str
    branch: str
    order_type: str = 'dine-in'
    items: tuple = ()
    appended_orders: tuple = ()
    is_paid: bool = False
    payment_method: str | None = None
    total_amount: Decimal = Decimal('0.00')
    order_status: str = 'pending'
    version: int = 0
    created_at: str = ''

    @classmethod
    def from_wire(cls, data):
        return cls(
            id=str(data['id']),
            order_number=int(data.get('order_number') or 0),
            customer_name=data.get('customer_name', ''),
            branch=data.get('branch', ''),
            order_type=data.get('order_type', 'dine-in'),
            items=tuple(OrderItem.from_wire(item) for item in data.get('items', ())),
            appended_orders=tuple(AppendedOrder.from_wire(a) for a in data.get('appended_orders', ())),
            is_paid=bool(data.get('is_paid')),
            payment_method=data.get('payment_method'),
            total_amount=to_decimal(data.get('total_amount')),
            order_status=data.get('order_status', 'pending'),
            version=int(data.get('version') or 0),
            created_at=data.get('created_at') or '',
        )

    @property
    def subtotal(self):
        """Amount due for the main items; appended orders are paid separately."""
        return sum((item.line_total for item in self.items), Decimal('0.00'))

    @property
    def all_items(self):
        items = list(self.items)
        for appended in self.appended_orders:
            items.extend(appended.items)
        return items


@dataclass(frozen=True)
class Expense:
    """A withdrawal or purchase."""

    id: str
    type: str
    amount: Decimal
    description: str = ''
    charged_to: str = 'john'
    payment_method: str | None = None
    branch: str = ''
    created_by_name: str = ''
    created_at: str = ''

    @classmethod
    def from_wire(cls, data):
        return cls(
            id=str(data['id']),
            type=data['type'],
            amount=to_decimal(data['amount']),
            description=data.get('description', ''),
            charged_to=data.get('charged_to', 'john'),
            payment_method=data.get('payment_method'),
            branch=data.get('branch', ''),
            created_by_name=data.get('created_by_name', ''),
            created_at=data.get('created_at') or '',
        )


@dataclass(frozen=True)
class Photo:
    id: str
    image: str
    display_order: int
    is_active: bool = False
    alt_text: str = 'Customer photo'

    @classmethod
    def from_wire(cls, data):
        return cls(
            id=str(data['id']),
            image=data.get('image', ''),
            display_order=int(data['display_order']),
            is_active=bool(data.get('is_active')),
            alt_text=data.get('alt_text') or 'Customer photo',
        )


@dataclass(frozen=True)
class DTRRecord:
    id: str
    status: str
    clock_in_time: str
    date: str
    branch: str = ''
    clock_out_time: str | None = None
    notes: str = ''
    work_duration: Decimal | None = None

    @classmethod
    def from_wire(cls, data):
        duration = data.get('work_duration')
        return cls(
            id=str(data['id']),
            status=data['status'],
            clock_in_time=data['clock_in_time'],
            date=data['date'],
            branch=data.get('branch', ''),
            clock_out_time=data.get('clock_out_time'),
            notes=data.get('notes') or '',
            work_duration=None if duration is None else to_decimal(duration),
        )


@dataclass
class Notice:
    """A transient message for the user (failed request, rejected action)."""

    message: str
    level: str = 'error'
    details: dict = field(default_factory=dict)
