"""
Unit tests for StoreRepository and ImportJobRepository writes
"""
import pytest
from unittest.mock import patch

from storefront.repositories.import_job_repository import ImportJobRepository
from storefront.repositories.store_repository import StoreRepository


class TestGetOrCreateStore:

    @patch('storefront.repositories.store_repository.get_db_connection_dict')
    def test_existing_store(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = {'id': 'store-wf'}

        store_id = StoreRepository().get_or_create_store('wefullfill-store', 'WeFulFill Store', 'WeFulFill')

        assert store_id == 'store-wf'
        assert cursor.execute.call_count == 1
        conn.commit.assert_not_called()

    @patch('storefront.repositories.store_repository.get_db_connection_dict')
    def test_creates_vendor_and_store(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.side_effect = [None, {'id': 'vendor-9'}, {'id': 'store-9'}]

        store_id = StoreRepository().get_or_create_store(
            'wefullfill-store', 'WeFulFill Store', 'WeFulFill', user_id='admin-1'
        )

        assert store_id == 'store-9'
        assert cursor.execute.call_args_list[1].args[1] == ('WeFulFill', 'admin-1')
        assert cursor.execute.call_args_list[2].args[1][0] == 'vendor-9'
        conn.commit.assert_called_once()


class TestImportJobRepository:

    @patch('storefront.repositories.import_job_repository.get_db_connection_dict')
    def test_start(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = {'id': 7}

        assert ImportJobRepository().start('wefullfill', 12, created_by='admin-1') == '7'
        conn.commit.assert_called_once()

    @pytest.mark.parametrize("error_message,status", [(None, 'completed'), ("token expired", 'failed')])
    @patch('storefront.repositories.import_job_repository.get_db_connection_dict')
    def test_finish(self, mock_get_conn, mock_connection, error_message, status):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn

        ImportJobRepository().finish('7', successful=10, failed=2, error_message=error_message)

        params = cursor.execute.call_args.args[1]
        assert params[0] == status
        assert params[1:4] == (12, 10, 2)
