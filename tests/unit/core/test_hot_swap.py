"""Tests for the swappable configuration holder."""

import threading

from evo_common.core import SharedConfig
from evo_common.schemas import GatewayConfig, ServerConfig


def _config(port: int) -> GatewayConfig:
    return GatewayConfig(server=ServerConfig(host="0.0.0.0", port=port))


class TestSharedConfig:
    """Test snapshot reads and wholesale swaps."""

    def test_current(self):
        """Test the initial snapshot is returned."""
        initial = _config(8080)
        shared = SharedConfig(initial, name="gateway")

        assert shared.current() is initial
        assert shared.current_hash() == initial.config_hash()

    def test_swap_returns_previous(self):
        """Test swap replaces the snapshot and hands back the old one."""
        initial, updated = _config(8080), _config(9090)
        shared = SharedConfig(initial)

        previous = shared.swap(updated)

        assert previous is initial
        assert shared.current() is updated

    def test_old_snapshot_is_unchanged(self):
        """Test readers holding the old snapshot keep a consistent view."""
        shared = SharedConfig(_config(8080))
        snapshot = shared.current()

        shared.swap(_config(9090))

        assert snapshot.server.port == 8080

    def test_swap_if_changed(self):
        """Test equal content does not trigger a swap."""
        initial = _config(8080)
        shared = SharedConfig(initial)

        assert shared.swap_if_changed(_config(8080)) is False
        assert shared.current() is initial
        assert shared.swap_if_changed(_config(9090)) is True
        assert shared.current().server.port == 9090

    def test_listeners_called_after_swap(self):
        """Test subscribers see the previous and new values."""
        shared = SharedConfig(_config(8080))
        seen = []
        shared.subscribe(lambda old, new: seen.append((old.server.port, new.server.port)))

        shared.swap(_config(9090))
        shared.swap_if_changed(_config(9090))

        assert seen == [(8080, 9090)]

    def test_concurrent_swaps(self):
        """Test concurrent swaps leave one of the written values in place."""
        shared = SharedConfig(_config(1))
        values = [_config(port) for port in range(2, 22)]
        threads = [threading.Thread(target=shared.swap, args=(v,)) for v in values]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert shared.current() in values
