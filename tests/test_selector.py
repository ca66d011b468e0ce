import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch
from anchorclock.core.clock import InternalClock
from anchorclock.core.config import ClockSettings
from anchorclock.core.errors import ClockError, NetworkTimeUnavailableError
from anchorclock.core.types import Candidate
from anchorclock.network.selector import NetworkTimeSource, fetch_network_time

NETWORK_TIME = datetime(2000, 1, 1, tzinfo=timezone.utc)

def fake_resolver(*candidates):
    pulled = []

    def resolver(servers, timeout):
        for candidate in candidates:
            pulled.append(candidate)
            yield candidate

    resolver.pulled = pulled
    return resolver

class TestFetchNetworkTime(unittest.TestCase):
    def setUp(self):
        self.settings = ClockSettings(servers="a.example,b.example", dns_timeout=0.2, socket_timeout=0.3, port=1123)
        self.first = Candidate(host="a.example", address="192.0.2.1")
        self.second = Candidate(host="a.example", address="192.0.2.2")
        self.third = Candidate(host="b.example", address="192.0.2.3")

    def test_first_usable_result_wins(self):
        resolver = fake_resolver(self.first, self.second, self.third)
        exchange = MagicMock(side_effect=[None, NETWORK_TIME, AssertionError("not reached")])

        result = fetch_network_time(self.settings, resolver=resolver, exchange=exchange)

        self.assertEqual(result, NETWORK_TIME)
        self.assertEqual(exchange.call_count, 2)
        exchange.assert_any_call("192.0.2.1", 1123, 0.3)
        exchange.assert_called_with("192.0.2.2", 1123, 0.3)
        # third candidate never pulled from the stream
        self.assertEqual(resolver.pulled, [self.first, self.second])

    def test_exhaustion_names_servers(self):
        resolver = fake_resolver(self.first, self.third)
        exchange = MagicMock(return_value=None)

        with self.assertRaises(NetworkTimeUnavailableError) as ctx:
            fetch_network_time(self.settings, resolver=resolver, exchange=exchange)

        self.assertIsInstance(ctx.exception, ClockError)
        self.assertEqual(ctx.exception.servers, "a.example,b.example")
        self.assertIn("'a.example,b.example'", str(ctx.exception))
        self.assertEqual(exchange.call_count, 2)

    def test_no_candidates(self):
        exchange = MagicMock()
        with self.assertRaises(NetworkTimeUnavailableError):
            fetch_network_time(self.settings, resolver=fake_resolver(), exchange=exchange)
        exchange.assert_not_called()

    def test_resolver_receives_parsed_servers_and_timeout(self):
        resolver = MagicMock(return_value=iter([]))
        settings = ClockSettings(servers="a.example, a.example ,bad host", dns_timeout=0.2)
        with self.assertRaises(NetworkTimeUnavailableError):
            fetch_network_time(settings, resolver=resolver, exchange=MagicMock())
        resolver.assert_called_once_with(("a.example",), 0.2)

class TestNetworkTimeSource(unittest.TestCase):
    @patch("anchorclock.network.selector.fetch_network_time", return_value=NETWORK_TIME)
    def test_fetch_uses_settings(self, mock_fetch):
        settings = ClockSettings(servers="a.example")
        self.assertEqual(NetworkTimeSource(settings).fetch(), NETWORK_TIME)
        mock_fetch.assert_called_once_with(settings)

    @patch("anchorclock.network.selector.fetch_network_time",
           side_effect=NetworkTimeUnavailableError("a.example"))
    def test_unreachable_servers_leave_clock_uninitialized(self, _):
        clock = InternalClock(time_source=NetworkTimeSource(ClockSettings(servers="a.example")))
        with self.assertRaises(NetworkTimeUnavailableError):
            clock.initialize()
        self.assertFalse(clock.is_initialized)

    @patch("anchorclock.network.selector.fetch_network_time", return_value=NETWORK_TIME)
    def test_clock_defaults_to_network_source(self, mock_fetch):
        clock = InternalClock()
        clock.initialize()
        self.assertEqual(clock.genesis, NETWORK_TIME)
        self.assertEqual(mock_fetch.call_count, 1)

if __name__ == '__main__':
    unittest.main()
