"""
Request store — service requests and customer responses in SQLite.
"""
import logging
import sqlite3
from contextlib import contextmanager

from ..database import get_db
from ..errors import PersistenceError
from ..models import (
    CustomerResponse, ServiceRequest,
    STATUS_WAITING_CUSTOMER,
)

logger = logging.getLogger(__name__)

CREATED = 'created'
UPDATED = 'updated'


class RequestStore:
    """Repository over the service_requests and customer_responses tables."""

    def __init__(self, db_path, mirror=None):
        self.db_path = db_path
        self.mirror = mirror

    @contextmanager
    def _connection(self, action):
        try:
            with get_db(self.db_path) as conn:
                yield conn
        except sqlite3.Error as e:
            logger.error(f"Database error while trying to {action}: {e}")
            raise PersistenceError(f"Failed to {action}") from e

    def _mirror(self, request):
        if self.mirror and request:
            record = request.to_dict()
            record.pop('id', None)
            self.mirror.mirror(record)

    def upsert_request(self, si_number, customer_email, sku, assigned_user_email,
                       customer_name='', customer_phone='', customer_address='',
                       shipment_date=''):
        """
        Create a request, or overwrite the mutable fields of the existing one.

        Returns (ServiceRequest, 'created' | 'updated'). The row id, created_at
        and status of an existing request are preserved.
        """
        with self._connection(f"save request {si_number}") as conn:
            existing = conn.execute(
                "SELECT id FROM service_requests WHERE si_number = ?", (si_number,)
            ).fetchone()
            conn.execute('''
                INSERT INTO service_requests
                (si_number, customer_name, customer_email, customer_phone,
                 customer_address, sku, shipment_date, assigned_user_email, status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(si_number) DO UPDATE SET
                    customer_name = excluded.customer_name,
                    customer_email = excluded.customer_email,
                    customer_phone = excluded.customer_phone,
                    customer_address = excluded.customer_address,
                    sku = excluded.sku,
                    shipment_date = excluded.shipment_date,
                    assigned_user_email = excluded.assigned_user_email,
                    updated_at = CURRENT_TIMESTAMP
            ''', (si_number, customer_name, customer_email, customer_phone,
                  customer_address, sku, shipment_date, assigned_user_email,
                  STATUS_WAITING_CUSTOMER))
            conn.commit()
            row = conn.execute(
                "SELECT * FROM service_requests WHERE si_number = ?", (si_number,)
            ).fetchone()

        request = ServiceRequest.from_row(row)
        outcome = UPDATED if existing else CREATED
        logger.info(f"Request {si_number} {outcome} (id {request.id})")
        self._mirror(request)
        return request, outcome

    def get_request(self, si_number):
        with self._connection(f"load request {si_number}") as conn:
            row = conn.execute(
                "SELECT * FROM service_requests WHERE si_number = ?", (si_number,)
            ).fetchone()
        return ServiceRequest.from_row(row) if row else None

    def find_pending_request_by_email(self, email):
        """Most recently created request still waiting on this customer, or None."""
        with self._connection(f"look up pending request for {email}") as conn:
            row = conn.execute('''
                SELECT * FROM service_requests
                WHERE LOWER(customer_email) = LOWER(?) AND status = ?
                ORDER BY created_at DESC, id DESC
                LIMIT 1
            ''', (email, STATUS_WAITING_CUSTOMER)).fetchone()
        return ServiceRequest.from_row(row) if row else None

    def list_requests(self, status=None, customer_email=None, limit=50, offset=0):
        query = "SELECT * FROM service_requests WHERE 1=1"
        params = []
        if status:
            query += " AND status = ?"
            params.append(status)
        if customer_email:
            query += " AND LOWER(customer_email) = LOWER(?)"
            params.append(customer_email)
        query += " ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with self._connection("list requests") as conn:
            rows = conn.execute(query, params).fetchall()
        return [ServiceRequest.from_row(row) for row in rows]

    def append_response(self, request_id, serial_number, problem_description, warranty_status):
        with self._connection(f"record response for request {request_id}") as conn:
            cursor = conn.execute('''
                INSERT INTO customer_responses
                (service_request_id, serial_number, problem_description, warranty_status)
                VALUES (?, ?, ?, ?)
            ''', (request_id, serial_number, problem_description, warranty_status))
            conn.commit()
            row = conn.execute(
                "SELECT * FROM customer_responses WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        logger.info(f"Recorded customer response {row['id']} for request {request_id}")
        return CustomerResponse.from_row(row)

    def list_responses(self, request_id):
        with self._connection(f"list responses for request {request_id}") as conn:
            rows = conn.execute('''
                SELECT * FROM customer_responses
                WHERE service_request_id = ?
                ORDER BY received_at, id
            ''', (request_id,)).fetchall()
        return [CustomerResponse.from_row(row) for row in rows]

    def update_status(self, request_id, status):
        with self._connection(f"update status of request {request_id}") as conn:
            conn.execute('''
                UPDATE service_requests
                SET status = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
            ''', (status, request_id))
            conn.commit()
            row = conn.execute(
                "SELECT * FROM service_requests WHERE id = ?", (request_id,)
            ).fetchone()
        request = ServiceRequest.from_row(row) if row else None
        self._mirror(request)
        return request

    def stats(self):
        with self._connection("compute request statistics") as conn:
            by_status = {
                row['status']: row['count'] for row in conn.execute('''
                    SELECT status, COUNT(*) AS count
                    FROM service_requests GROUP BY status
                ''')
            }
            responses = conn.execute("SELECT COUNT(*) FROM customer_responses").fetchone()[0]
        return {
            "total_requests": sum(by_status.values()),
            "by_status": by_status,
            "total_responses": responses,
        }
