import unittest
from unittest.mock import MagicMock, patch
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sqlalchemy.exc import OperationalError

from app import create_app
from models.waitlist import db
from services import database
from services.errors import DatabaseUnavailableError


def _connection_error():
    return OperationalError('SELECT 1', {}, Exception('connection refused'))


class TestConnectivityProbe(unittest.TestCase):
    """Tests for ping, check_connection and wait_for_database"""

    def setUp(self):
        self.app = create_app({
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'RATELIMIT_ENABLED': False,
        })
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self):
        db.session.remove()
        self.app_context.pop()

    def test_ping_runs_select_one(self):
        self.assertEqual(database.ping(db), 1)

    def test_check_connection_success(self):
        self.assertTrue(database.check_connection(db))

    def test_check_connection_failure_does_not_raise(self):
        with patch('services.database.ping', side_effect=_connection_error()):
            self.assertFalse(database.check_connection(db))

    def test_wait_returns_on_first_success(self):
        sleep = MagicMock()
        self.assertTrue(database.wait_for_database(db, max_retries=5, retry_delay=5, sleep=sleep))
        sleep.assert_not_called()

    def test_wait_retries_until_store_answers(self):
        sleep = MagicMock()
        with patch('services.database.check_connection', side_effect=[False, False, True]) as check:
            database.wait_for_database(db, max_retries=5, retry_delay=5, sleep=sleep)
        self.assertEqual(check.call_count, 3)
        self.assertEqual(sleep.call_count, 2)
        sleep.assert_called_with(5)

    def test_wait_gives_up_after_max_retries(self):
        sleep = MagicMock()
        with patch('services.database.check_connection', return_value=False) as check:
            with self.assertRaises(DatabaseUnavailableError):
                database.wait_for_database(db, max_retries=5, retry_delay=5, sleep=sleep)
        self.assertEqual(check.call_count, 5)
        # No pointless wait after the final attempt
        self.assertEqual(sleep.call_count, 4)


if __name__ == '__main__':
    unittest.main()
