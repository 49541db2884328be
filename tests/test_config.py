import unittest
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import ConfigError, resolve_database_url, engine_options


class TestConfig(unittest.TestCase):
    """Tests for database URL and pool configuration"""

    def test_postgres_scheme_is_rewritten(self):
        url = resolve_database_url('postgres://user:pw@db.example.com:5432/waitlist', False)
        self.assertEqual(url, 'postgresql://user:pw@db.example.com:5432/waitlist')

    def test_missing_url_defaults_to_sqlite_outside_production(self):
        self.assertTrue(resolve_database_url(None, False).startswith('sqlite:///'))

    def test_missing_url_is_fatal_in_production(self):
        with self.assertRaises(ConfigError):
            resolve_database_url('', True)

    def test_pool_settings(self):
        options = engine_options('postgresql://db/waitlist', False)
        self.assertEqual(options['pool_size'], 20)
        self.assertEqual(options['max_overflow'], 0)
        self.assertEqual(options['pool_timeout'], 5)
        self.assertEqual(options['pool_recycle'], 30)
        self.assertNotIn('connect_args', options)

    def test_tls_only_in_production(self):
        options = engine_options('postgresql://db/waitlist', True)
        self.assertEqual(options['connect_args'], {'sslmode': 'require'})

    def test_sqlite_gets_no_pool_options(self):
        self.assertEqual(engine_options('sqlite://', True), {})


if __name__ == '__main__':
    unittest.main()
