"""
Import Job Repository - bookkeeping for external catalog imports
"""
from typing import Optional
from psycopg2.extras import Json

from storefront.core.database import get_db_connection_dict


class ImportJobRepository:
    """Repository for the import_jobs table"""

    def start(self, source: str, total_items: int, created_by: Optional[str] = None) -> str:
        """
        Open a running import job

        Returns:
            Job ID
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO import_jobs (
                    source, status, total_items, processed_items,
                    successful_items, failed_items, created_by, started_at
                )
                VALUES (%s, 'running', %s, 0, 0, 0, %s, NOW())
                RETURNING id
            """, (source, total_items, created_by))

            job_id = cursor.fetchone()['id']
            conn.commit()
            return str(job_id)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def finish(
        self,
        job_id: str,
        successful: int,
        failed: int,
        error_message: Optional[str] = None,
        metadata: Optional[dict] = None
    ) -> None:
        """Close a job as completed, or failed when error_message is set"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE import_jobs
                SET status = %s,
                    processed_items = %s,
                    successful_items = %s,
                    failed_items = %s,
                    error_message = %s,
                    metadata = %s,
                    completed_at = NOW()
                WHERE id = %s
            """, (
                'failed' if error_message else 'completed',
                successful + failed,
                successful,
                failed,
                error_message,
                Json(metadata or {}),
                job_id,
            ))
            conn.commit()

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
