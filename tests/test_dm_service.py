import asyncio
import threading
from types import SimpleNamespace

import discord
import pytest

from wordlebot.models.errors import DirectMessageError
from wordlebot.services.dm_service import (
    DirectMessageService, get_dm_service, initialize_dm_service, reset_dm_service
)


class FakeUser:
    def __init__(self, user_id, fail=False, delay=0.0, error=None):
        self.id = user_id
        self.fail = fail
        self.delay = delay
        self.error = error
        self.inbox = []

    async def send(self, content):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.fail:
            raise discord.DiscordException("Cannot send messages to this user")
        self.inbox.append(content)


class FakeClient:
    def __init__(self, cached=(), remote=()):
        self.cached = {user.id: user for user in cached}
        self.remote = {user.id: user for user in remote}

    def get_user(self, user_id):
        return self.cached.get(user_id)

    async def fetch_user(self, user_id):
        if user_id not in self.remote:
            raise discord.DiscordException("Unknown User")
        return self.remote[user_id]


@pytest.fixture
def running_loop():
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    yield loop
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=5)
    loop.close()


def test_send_to_cached_user(running_loop) -> None:
    alice = FakeUser(1)
    service = DirectMessageService(FakeClient(cached=[alice]), loop=running_loop)

    service.send_to_user(1, "hello")

    assert alice.inbox == ["hello"]


def test_send_fetches_uncached_user(running_loop) -> None:
    bob = FakeUser(2)
    service = DirectMessageService(FakeClient(remote=[bob]), loop=running_loop)

    service.send_to_user(2, "hi bob")

    assert bob.inbox == ["hi bob"]


def test_unknown_user_raises(running_loop) -> None:
    service = DirectMessageService(FakeClient(), loop=running_loop)

    with pytest.raises(DirectMessageError) as excinfo:
        service.send_to_user(3, "anyone?")

    assert excinfo.value.user_id == 3
    assert "Unknown User" in excinfo.value.reason


def test_slow_delivery_times_out(running_loop) -> None:
    slow = FakeUser(4, delay=5)
    service = DirectMessageService(FakeClient(cached=[slow]), loop=running_loop, timeout=0.1)

    with pytest.raises(DirectMessageError) as excinfo:
        service.send_to_user(4, "late")

    assert "timed out" in excinfo.value.reason


def test_group_send_continues_past_failures(running_loop) -> None:
    ok_one, blocked, ok_two = FakeUser(1), FakeUser(2, fail=True), FakeUser(3)
    service = DirectMessageService(FakeClient(cached=[ok_one, blocked, ok_two]), loop=running_loop)

    result = service.send_to_group([1, 2, 3], "news")

    assert result['delivered'] == [1, 3]
    assert [entry['user_id'] for entry in result['failed']] == [2]
    assert ok_one.inbox == ok_two.inbox == ["news"]


def _http_error(error_class, status, reason):
    response = SimpleNamespace(status=status, reason=reason)
    return error_class(response, reason)


@pytest.mark.parametrize("error, expected_reason", [
    (_http_error(discord.NotFound, 404, "Not Found"), "unknown user"),
    (_http_error(discord.Forbidden, 403, "Forbidden"), "user does not accept direct messages"),
])
def test_http_errors_map_to_readable_reasons(running_loop, error, expected_reason) -> None:
    user = FakeUser(5, error=error)
    service = DirectMessageService(FakeClient(cached=[user]), loop=running_loop)

    with pytest.raises(DirectMessageError) as excinfo:
        service.send_to_user(5, "hi")

    assert excinfo.value.reason == expected_reason
    assert isinstance(excinfo.value.__cause__, type(error))


def test_group_send_records_unexpected_errors(running_loop) -> None:
    first = FakeUser(1)
    broken = FakeUser(2, error=RuntimeError("gateway hiccup"))
    last = FakeUser(3)
    service = DirectMessageService(FakeClient(cached=[first, broken, last]), loop=running_loop)

    result = service.send_to_group([1, 2, 3], "news")

    assert result['delivered'] == [1, 3]
    assert result['failed'] == [{'user_id': 2, 'error': "gateway hiccup"}]
    assert last.inbox == ["news"]


def test_content_is_validated_before_scheduling(running_loop) -> None:
    service = DirectMessageService(FakeClient(), loop=running_loop)
    with pytest.raises(ValueError):
        service.send_to_user(1, "")
    with pytest.raises(ValueError):
        service.send_to_group([1], "x" * 2001)


def test_loop_defaults_to_client_loop(running_loop) -> None:
    client = SimpleNamespace(loop=running_loop)
    assert DirectMessageService(client).loop is running_loop


def test_global_service_accessors(running_loop) -> None:
    service = initialize_dm_service(FakeClient(), loop=running_loop, timeout=3)
    assert get_dm_service() is service
    assert service.timeout == 3
    reset_dm_service()
    assert get_dm_service() is None
