from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from findoc.database.connection import get_connection
from findoc.normalization.models import BankStatementRecord, PaystubRecord
from findoc.processor.exceptions import DocumentNotFoundError
from findoc.processor.models import DocumentKind, DocumentStatus, FinancialDocument


class FinancialDocumentsRepository:
    """Database operations for financial_documents and the extracted data tables."""

    def find_by_id(self, document_id: int) -> FinancialDocument:
        """Find a financial document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, kind, file_path, status
                    FROM financial_documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return FinancialDocument(
            id=row["id"],
            kind=DocumentKind(row["kind"]),
            source_ref=row["file_path"],
            status=DocumentStatus(row["status"]),
        )

    def save_paystub_result(self, document_id: int, record: PaystubRecord) -> None:
        """Upsert paystub data and mark the document completed in one transaction.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        payload = record.to_payload()
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO paystub_data (
                        document_id, gross_pay, net_pay,
                        pay_period_start, pay_period_end, extracted_data
                    )
                    VALUES (%s, %s, %s, %s, %s, %s)
                    ON CONFLICT (document_id) DO UPDATE
                    SET gross_pay = EXCLUDED.gross_pay,
                        net_pay = EXCLUDED.net_pay,
                        pay_period_start = EXCLUDED.pay_period_start,
                        pay_period_end = EXCLUDED.pay_period_end,
                        extracted_data = EXCLUDED.extracted_data
                    """,
                    (
                        document_id,
                        record.gross_pay,
                        record.net_pay,
                        record.pay_period_start,
                        record.pay_period_end,
                        Jsonb(payload),
                    ),
                )
                self._set_status(cur, document_id, DocumentStatus.COMPLETED)
            conn.commit()

    def save_bank_statement_result(
        self, document_id: int, record: BankStatementRecord
    ) -> None:
        """Upsert bank statement data and mark the document completed in one transaction.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        payload = record.to_payload()
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO bank_statement_data (
                        document_id, statement_month, total_deposits,
                        total_withdrawals, ending_balance, transactions
                    )
                    VALUES (%s, %s, %s, %s, %s, %s)
                    ON CONFLICT (document_id) DO UPDATE
                    SET statement_month = EXCLUDED.statement_month,
                        total_deposits = EXCLUDED.total_deposits,
                        total_withdrawals = EXCLUDED.total_withdrawals,
                        ending_balance = EXCLUDED.ending_balance,
                        transactions = EXCLUDED.transactions
                    """,
                    (
                        document_id,
                        record.statement_month,
                        record.total_deposits,
                        record.total_withdrawals,
                        record.ending_balance,
                        Jsonb(payload["transactions"]),
                    ),
                )
                self._set_status(cur, document_id, DocumentStatus.COMPLETED)
            conn.commit()

    def mark_failed(self, document_id: int) -> None:
        """Set document status to failed. No extracted data is written."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                self._set_status(cur, document_id, DocumentStatus.FAILED)
            conn.commit()

    @staticmethod
    def _set_status(
        cur: psycopg.Cursor[Any], document_id: int, status: DocumentStatus
    ) -> None:
        cur.execute(
            """
            UPDATE financial_documents
            SET status = %s
            WHERE id = %s
            """,
            (status.value, document_id),
        )
        if cur.rowcount == 0:
            raise DocumentNotFoundError(f"Document {document_id} not found")
