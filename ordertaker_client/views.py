"""
View controllers.

Each controller is built from an ``AppSession`` and keeps the state one
screen shows. Network and server failures are caught per action and
turned into ``Notice`` entries so the screen stays usable.
"""

import logging
import queue

from .api import RequestSequencer
from .attendance import AttendanceTracker, summarize_by_month
from .exceptions import NetworkError, ServerError, ValidationError
from .expenses import compute_expense_totals, filter_expenses
from .models import Notice
from .photos import ensure_can_activate, move_photo
from .realtime import OrderEventRouter
from .reconcile import (
    ORDER_CREATED,
    ORDER_DELETED,
    ORDER_UPDATED,
    ReorderOutcome,
    merge_fetched_orders,
    reconcile_order_event,
    reconcile_reorder,
    upsert_order,
)

logger = logging.getLogger(__name__)

FAILED = object()


class BaseView:

    def __init__(self, session):
        self.session = session
        self.api = session.api
        self.notices = []
        self.loading = False

    def notify(self, message, level='error', **details):
        self.notices.append(Notice(message, level, details))

    def _attempt(self, description, func, *args, **kwargs):
        """Call ``func``; on failure add a notice and return ``FAILED``."""
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            self.notify(str(e), level='warning')
        except ServerError as e:
            logger.info('%s rejected: %s', description, e)
            self.notify(f'{description} failed: {e.message}', status=e.status_code)
        except NetworkError as e:
            logger.warning('%s failed: %s', description, e)
            self.notify(f'{description} failed: {e}')
        return FAILED

    def dismiss_notices(self):
        notices, self.notices = self.notices, []
        return notices


class OrderListView(BaseView):
    """
    Orders of the selected branch, kept current by the realtime feed.

    Realtime events arrive on the channel thread and are only queued
    there; ``poll()`` applies them on the thread that owns the view.
    """

    def __init__(self, session):
        session.auth.require(lambda user: user.is_admin or user.is_order_taker or user.is_crew)
        super().__init__(session)
        self.orders = []
        self.filters = {}
        self.sequencer = RequestSequencer()
        self._router = OrderEventRouter(session.channel, lambda: session.branch.current)
        self._unsubscribe_branch = None
        self._events = queue.Queue()
        self._fetching = 0
        self._deleted_during_fetch = set()
        self._pushed_during_fetch = set()

    def attach(self):
        self._router.on_order(self._enqueue)
        self._unsubscribe_branch = self.session.branch.on_change(self._branch_changed)
        self.reload()

    def detach(self):
        self._router.detach()
        if self._unsubscribe_branch:
            self._unsubscribe_branch()
            self._unsubscribe_branch = None

    def _branch_changed(self, branch_id):
        self.orders = []
        self.reload()

    def _enqueue(self, event, data):
        self._events.put((event, data))

    def poll(self):
        """Apply queued realtime events; returns how many were applied."""
        applied = 0
        while True:
            try:
                event, data = self._events.get_nowait()
            except queue.Empty:
                return applied
            self.handle_event(event, data)
            applied += 1

    def load(self, **filters):
        """Fetch with exactly these filters; no arguments clears them."""
        self.filters = filters
        return self.reload()

    def reload(self):
        """Fetch again with the current filters."""
        ticket = self.sequencer.issue('orders')
        if not self._fetching:
            self._deleted_during_fetch = set()
            self._pushed_during_fetch = set()
        self._fetching += 1
        self.loading = True
        try:
            result = self._attempt('Loading orders', self.api.list_orders, branch=self.session.branch.current, **self.filters)
        finally:
            self._fetching -= 1
        if result is not FAILED:
            self.sequencer.apply('orders', ticket, lambda: setattr(self, 'orders', merge_fetched_orders(
                self.orders, result, deleted=self._deleted_during_fetch, pushed=self._pushed_during_fetch,
            )))
        if self.sequencer.is_current('orders', ticket):
            self.loading = False
        return self.orders

    def handle_event(self, event, data):
        if self._fetching and data.get('id') is not None:
            order_id = str(data['id'])
            if event == ORDER_DELETED:
                self._deleted_during_fetch.add(order_id)
                self._pushed_during_fetch.discard(order_id)
            elif event in (ORDER_CREATED, ORDER_UPDATED):
                self._pushed_during_fetch.add(order_id)
        self.orders = reconcile_order_event(self.orders, event, data, branch=self.session.branch.current)

    def _apply_order(self, order):
        self.orders = upsert_order(self.orders, order)

    def create_order(self, customer_name, items, order_type='dine-in'):
        order = self._attempt(
            'Creating order', self.api.create_order,
            customer_name, items, order_type=order_type, branch=self.session.branch.current,
        )
        if order is FAILED:
            return None
        self.orders = upsert_order(self.orders, order)
        return order

    def set_item_status(self, order_id, item_id, status, appended_id=None):
        user = self.session.auth.user
        crew = {}
        if status in ('preparing', 'ready'):
            crew = {'prepared_by': user.name, 'prepared_by_email': user.email}
        elif status == 'served':
            crew = {'served_by': user.name, 'served_by_email': user.email}

        order = self._attempt('Updating item', self.api.update_item_status, order_id, item_id, status, appended_id, **crew)
        if order is not FAILED:
            self._apply_order(order)

    def pay(self, order_id, payment_method, cash_amount=None, gcash_amount=None, appended_id=None):
        current = next((o for o in self.orders if o.id == order_id), None)
        amount_due = None
        if current is not None:
            if appended_id:
                appended = next((a for a in current.appended_orders if a.id == appended_id), None)
                if appended is not None:
                    amount_due = appended.subtotal
            else:
                amount_due = current.subtotal

        order = self._attempt(
            'Recording payment', self.api.set_payment, order_id,
            appended_id=appended_id, amount_due=amount_due, is_paid=True,
            payment_method=payment_method, cash_amount=cash_amount, gcash_amount=gcash_amount,
        )
        if order is not FAILED:
            self._apply_order(order)

    def delete_order(self, order_id):
        if self._attempt('Deleting order', self.api.delete_order, order_id) is not FAILED:
            self.orders = reconcile_order_event(self.orders, 'order:deleted', {'id': order_id})


class PhotoAdminView(BaseView):
    """Customer photo gallery management (super admin)."""

    def __init__(self, session):
        session.auth.require_admin()
        super().__init__(session)
        self.photos = []

    def load(self):
        photos = self._attempt('Loading photos', self.api.list_photos)
        if photos is not FAILED:
            self.photos = sorted(photos, key=lambda photo: photo.display_order)
        return self.photos

    def move(self, from_index, to_index):
        """Reorder locally, then persist; falls back to the server's order if that fails."""
        previous = list(self.photos)
        optimistic = move_photo(previous, from_index, to_index)
        self.photos = optimistic

        result = self._attempt('Saving photo order', self.api.reorder_photos, optimistic)
        if result is not FAILED:
            outcome = ReorderOutcome(True, tuple(result))
        else:
            canonical = self._attempt('Reloading photos', self.api.list_photos)
            outcome = ReorderOutcome(False, tuple(previous if canonical is FAILED else canonical))
        self.photos = reconcile_reorder(optimistic, outcome)
        return outcome.succeeded

    def _replace(self, updated):
        self.photos = sorted(
            [updated if photo.id == updated.id else photo for photo in self.photos],
            key=lambda photo: photo.display_order,
        )

    def set_active(self, photo_id, is_active):
        if is_active:
            try:
                ensure_can_activate(self.photos, editing_id=photo_id)
            except ValidationError as e:
                self.notify(str(e), level='warning')
                return False

        updated = self._attempt('Updating photo', self.api.update_photo, photo_id, is_active=is_active)
        if updated is FAILED:
            return False
        self._replace(updated)
        return True

    def add(self, image_path, alt_text=None, is_active=False):
        if is_active:
            try:
                ensure_can_activate(self.photos)
            except ValidationError as e:
                self.notify(str(e), level='warning')
                return None

        reference = self._attempt('Uploading image', self.api.upload_image, image_path)
        if reference is FAILED:
            return None
        photo = self._attempt('Adding photo', self.api.create_photo, reference, alt_text=alt_text, is_active=is_active)
        if photo is FAILED:
            return None
        self.photos = sorted(self.photos + [photo], key=lambda p: p.display_order)
        return photo

    def remove(self, photo_id):
        if self._attempt('Deleting photo', self.api.delete_photo, photo_id) is not FAILED:
            self.photos = [photo for photo in self.photos if photo.id != photo_id]


class AttendanceView(BaseView):
    """Crew time clock plus monthly history."""

    def __init__(self, session):
        session.auth.require_crew()
        super().__init__(session)
        self.tracker = AttendanceTracker(self.api, session.branch.current)
        self.history = {}

    def refresh(self):
        self.tracker.branch = self.session.branch.current
        self._attempt('Loading clock status', self.tracker.refresh)
        return self.tracker.is_clocked_in

    def clock_in(self, notes=''):
        return self._attempt('Clock in', self.tracker.clock_in, notes) is not FAILED

    def clock_out(self, notes=''):
        return self._attempt('Clock out', self.tracker.clock_out, notes) is not FAILED

    def load_history(self, **filters):
        result = self._attempt('Loading attendance', self.api.dtr_records, **filters)
        if result is not FAILED:
            records, _pagination = result
            self.history = summarize_by_month(records)
        return self.history


class ExpensesView(BaseView):
    """Withdrawals and purchases of the selected branch with live totals."""

    def __init__(self, session):
        session.auth.require(lambda user: user.is_admin or user.is_order_taker)
        super().__init__(session)
        self.records = []
        self.filters = {}

    def load(self, **query):
        records = self._attempt('Loading expenses', self.api.list_expenses, branch=self.session.branch.current, **query)
        if records is not FAILED:
            self.records = records
        return self.records

    def set_filters(self, type=None, charged_to=None, search=None):
        self.filters = {'type': type, 'charged_to': charged_to, 'search': search}

    @property
    def visible(self):
        return filter_expenses(self.records, **self.filters)

    @property
    def totals(self):
        return compute_expense_totals(self.visible)

    def add(self, type, amount, description, charged_to='john', payment_method=None):
        expense = self._attempt(
            'Saving expense', self.api.create_expense,
            type, amount, description, charged_to, payment_method, self.session.branch.current,
        )
        if expense is FAILED:
            return None
        self.records = [expense] + self.records
        return expense

    def remove(self, expense_id):
        if self._attempt('Deleting expense', self.api.delete_expense, expense_id) is not FAILED:
            self.records = [record for record in self.records if record.id != expense_id]
