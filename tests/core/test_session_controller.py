"""
Test suite for SessionLifecycleController.

Covers the IDLE/ACTIVE/STOPPING state machine, the elapsed timer, intensity
validation, the temperature buffer, persistence failures and teardown.

System role: Verification of session control business logic
"""

import asyncio
import uuid
from unittest.mock import AsyncMock

import pytest

from neurocare.boundary.device import InMemoryDeviceChannel
from neurocare.configs.therapy import TherapySettings
from neurocare.core.context import AuthContext, DeviceContext
from neurocare.core.exceptions import (
    DeviceNotConnectedError,
    InvalidSessionStateError,
    PersistenceError,
    ValidationError,
)
from neurocare.core.session_controller import SessionLifecycleController
from neurocare.models.live_session import SessionState


@pytest.fixture
def controller(user_id, device_channel, mock_repository, therapy_settings, now):
    """Provide an attached controller for a signed-in user."""
    ctrl = SessionLifecycleController(
        auth=AuthContext(user_id=user_id),
        device=DeviceContext(channel=device_channel),
        repository=mock_repository,
        settings=therapy_settings,
        clock=lambda: now,
    )
    ctrl.attach()
    return ctrl


class SlowStartChannel(InMemoryDeviceChannel):
    """Channel whose session-start acknowledgement waits for a release."""

    def __init__(self) -> None:
        super().__init__(connected=True)
        self.release = asyncio.Event()

    async def set_session_active(self, active: bool, intensity: int) -> None:
        if active:
            await self.release.wait()
        await super().set_session_active(active, intensity)


class TestStart:
    """Test suite for starting a session."""

    async def test_start_with_disconnected_device_is_rejected(
        self, controller, device_channel
    ) -> None:
        device_channel.set_connected(False)

        with pytest.raises(DeviceNotConnectedError, match="start session failed"):
            await controller.start()

        assert controller.is_active is False
        assert controller.state is SessionState.IDLE
        assert controller.timer_running is False
        assert device_channel.commands == []

    async def test_start_activates_and_notifies_device(self, controller, device_channel) -> None:
        await controller.start()

        assert controller.is_active is True
        assert controller.elapsed_seconds == 0
        assert controller.timer_running is True
        assert device_channel.session_active is True
        assert device_channel.commands[-1].action == "start"
        assert device_channel.commands[-1].value == 50

        await controller.close()

    async def test_start_twice_is_rejected(self, controller) -> None:
        await controller.start()

        with pytest.raises(InvalidSessionStateError):
            await controller.start()

        await controller.close()

    async def test_device_failure_during_start_is_logged_not_raised(
        self, controller, device_channel, caplog
    ) -> None:
        device_channel.set_session_active = AsyncMock(side_effect=ConnectionError("link down"))

        await controller.start()

        assert controller.is_active is True
        assert "device notification failed" in caplog.text

        await controller.close()


class TestStopAndPersist:
    """Test suite for stop, emergency stop and persistence."""

    async def test_five_ticks_then_stop_persists_five_seconds(
        self, controller, mock_repository, user_id, now
    ) -> None:
        await controller.start()
        for _ in range(5):
            controller.tick()

        completed = await controller.stop()

        mock_repository.save.assert_awaited_once()
        saved = mock_repository.save.await_args.args[0]
        assert saved.duration == 5
        assert saved.user_id == user_id
        assert saved.timestamp == now
        assert saved.vibration_intensity == 50
        assert saved.average_temperature == 37.0
        assert completed.record.id == mock_repository.save.return_value
        assert completed.message == "Your therapy session has been saved. Duration: 00:05"

        controller.tick()
        assert controller.elapsed_seconds == 5
        assert controller.timer_running is False
        assert controller.state is SessionState.IDLE

    async def test_acknowledge_resets_elapsed(self, controller) -> None:
        await controller.start()
        controller.tick()
        await controller.stop()

        controller.acknowledge()

        assert controller.elapsed_seconds == 0

    async def test_acknowledge_during_session_is_rejected(self, controller) -> None:
        await controller.start()

        with pytest.raises(InvalidSessionStateError):
            controller.acknowledge()

        await controller.close()

    async def test_stop_without_session_is_rejected(self, controller, mock_repository) -> None:
        with pytest.raises(InvalidSessionStateError, match="stop session failed"):
            await controller.stop()

        mock_repository.save.assert_not_awaited()

    async def test_stop_uses_last_temperature_and_current_intensity(
        self, controller, device_channel, mock_repository
    ) -> None:
        await controller.start()
        await controller.adjust_intensity(65)
        device_channel.publish_temperature(36.2)
        device_channel.publish_temperature(36.9)

        await controller.stop()

        saved = mock_repository.save.await_args.args[0]
        assert saved.vibration_intensity == 65
        assert saved.average_temperature == 36.9

    async def test_device_receives_start_vibration_stop_in_order(
        self, controller, device_channel
    ) -> None:
        await controller.start()
        await controller.adjust_intensity(70)
        await controller.stop()

        assert [(c.type, c.action, c.value) for c in device_channel.commands] == [
            ("session", "start", 50),
            ("vibration", None, 70),
            ("session", "stop", None),
        ]
        assert device_channel.session_active is False

    async def test_emergency_stop_saves_like_stop(self, controller, mock_repository) -> None:
        await controller.start()
        controller.tick()

        completed = await controller.emergency_stop()

        assert completed.record.duration == 1
        assert controller.state is SessionState.IDLE
        mock_repository.save.assert_awaited_once()

    async def test_emergency_stop_when_idle_is_rejected(self, controller) -> None:
        with pytest.raises(InvalidSessionStateError, match="emergency stop failed"):
            await controller.emergency_stop()

    async def test_persistence_failure_stops_session_and_keeps_record(
        self, controller, mock_repository
    ) -> None:
        mock_repository.save.side_effect = PersistenceError("save session failed: store down")
        await controller.start()
        controller.tick()

        with pytest.raises(PersistenceError):
            await controller.stop()

        assert controller.is_active is False
        assert controller.state is SessionState.IDLE
        assert controller.pending_record is not None
        assert controller.pending_record.duration == 1
        mock_repository.save.assert_awaited_once()

    async def test_unexpected_save_error_is_wrapped(self, controller, mock_repository) -> None:
        mock_repository.save.side_effect = RuntimeError("disk full")
        await controller.start()

        with pytest.raises(PersistenceError, match="stop session failed"):
            await controller.stop()

        assert controller.pending_record is not None

    async def test_retry_save_persists_pending_record(self, controller, mock_repository) -> None:
        record_id = uuid.uuid4()
        mock_repository.save.side_effect = [PersistenceError("store down"), record_id]
        await controller.start()
        with pytest.raises(PersistenceError):
            await controller.stop()

        completed = await controller.retry_save()

        assert completed.record.id == record_id
        assert controller.pending_record is None
        assert mock_repository.save.await_count == 2

    async def test_retry_save_without_pending_record_is_rejected(self, controller) -> None:
        with pytest.raises(InvalidSessionStateError, match="retry save failed"):
            await controller.retry_save()

    async def test_discard_pending(self, controller, mock_repository) -> None:
        mock_repository.save.side_effect = PersistenceError("store down")
        await controller.start()
        with pytest.raises(PersistenceError):
            await controller.stop()

        assert controller.discard_pending() is True
        assert controller.pending_record is None
        assert controller.discard_pending() is False

    async def test_pending_record_blocks_next_session_until_resolved(
        self, controller, mock_repository
    ) -> None:
        mock_repository.save.side_effect = [PersistenceError("store down"), uuid.uuid4()]
        await controller.start()
        for _ in range(3):
            controller.tick()
        with pytest.raises(PersistenceError):
            await controller.stop()
        unsaved = controller.pending_record

        with pytest.raises(InvalidSessionStateError, match="start session failed"):
            await controller.start()

        assert controller.is_active is False
        assert controller.pending_record is unsaved
        assert unsaved.duration == 3

        await controller.retry_save()
        await controller.start()
        assert controller.is_active is True
        await controller.close()

    async def test_start_allowed_after_discarding_pending_record(
        self, controller, mock_repository
    ) -> None:
        mock_repository.save.side_effect = [PersistenceError("store down"), uuid.uuid4()]
        await controller.start()
        with pytest.raises(PersistenceError):
            await controller.stop()
        controller.discard_pending()

        await controller.start()
        completed = await controller.stop()

        assert completed.record.id is not None
        assert controller.pending_record is None

    async def test_stop_without_user_is_rejected_after_stopping(
        self, device_channel, mock_repository, therapy_settings
    ) -> None:
        controller = SessionLifecycleController(
            auth=AuthContext(),
            device=DeviceContext(channel=device_channel),
            repository=mock_repository,
            settings=therapy_settings,
        )
        await controller.start()

        with pytest.raises(PersistenceError, match="no authenticated user"):
            await controller.stop()

        assert controller.state is SessionState.IDLE
        mock_repository.save.assert_not_awaited()

    async def test_stop_while_start_notification_in_flight(self, mock_repository, user_id) -> None:
        channel = SlowStartChannel()
        controller = SessionLifecycleController(
            auth=AuthContext(user_id=user_id),
            device=DeviceContext(channel=channel),
            repository=mock_repository,
            settings=TherapySettings(tick_interval_seconds=60),
        )
        starting = asyncio.create_task(controller.start())
        await asyncio.sleep(0)

        assert controller.is_active is True
        completed = await controller.stop()
        channel.release.set()
        await starting

        assert completed.record.duration == 0
        assert controller.state is SessionState.IDLE
        assert controller.timer_running is False


class TestTimer:
    """Test suite for the elapsed-time ticker."""

    async def test_tick_ignored_when_idle(self, controller) -> None:
        controller.tick()

        assert controller.elapsed_seconds == 0

    async def test_timer_advances_and_stops_with_session(
        self, device_channel, mock_repository, user_id
    ) -> None:
        controller = SessionLifecycleController(
            auth=AuthContext(user_id=user_id),
            device=DeviceContext(channel=device_channel),
            repository=mock_repository,
            settings=TherapySettings(tick_interval_seconds=0.01),
        )
        await controller.start()
        await asyncio.sleep(0.1)

        completed = await controller.stop()
        elapsed = controller.elapsed_seconds
        await asyncio.sleep(0.05)

        assert elapsed >= 1
        assert completed.record.duration == elapsed
        assert controller.elapsed_seconds == elapsed


class TestAdjustIntensity:
    """Test suite for intensity changes."""

    @pytest.mark.parametrize("value", [150, -1, 101, True, 50.5, "60"])
    async def test_invalid_values_rejected_without_change(
        self, controller, device_channel, value
    ) -> None:
        await controller.start()
        commands_before = len(device_channel.commands)

        with pytest.raises(ValidationError, match="adjust intensity failed"):
            await controller.adjust_intensity(value)

        assert controller.vibration_intensity == 50
        assert len(device_channel.commands) == commands_before
        await controller.close()

    async def test_valid_value_forwarded_to_device(self, controller, device_channel) -> None:
        await controller.start()

        await controller.adjust_intensity(0)

        assert controller.vibration_intensity == 0
        assert device_channel.intensity == 0
        await controller.close()

    async def test_allowed_while_idle_by_default(self, controller) -> None:
        await controller.adjust_intensity(30)

        assert controller.vibration_intensity == 30

    async def test_can_require_active_session(
        self, device_channel, mock_repository, user_id
    ) -> None:
        controller = SessionLifecycleController(
            auth=AuthContext(user_id=user_id),
            device=DeviceContext(channel=device_channel),
            repository=mock_repository,
            settings=TherapySettings(require_active_for_intensity=True),
        )

        with pytest.raises(InvalidSessionStateError):
            await controller.adjust_intensity(30)

        assert controller.vibration_intensity == 50

    async def test_remote_intensity_is_last_write_wins(self, controller, device_channel) -> None:
        await controller.adjust_intensity(40)
        device_channel.publish_intensity(75)

        assert controller.vibration_intensity == 75

        await controller.adjust_intensity(20)
        assert controller.vibration_intensity == 20

    async def test_invalid_remote_intensity_ignored(self, controller, device_channel) -> None:
        device_channel.publish_intensity(250)

        assert controller.vibration_intensity == 50


class TestTemperatureFeed:
    """Test suite for the temperature subscription."""

    async def test_buffer_keeps_latest_thirty_samples(self, controller, device_channel) -> None:
        for i in range(31):
            device_channel.publish_temperature(30.0 + i)

        samples = controller.recent_temperatures
        assert len(samples) == 30
        assert samples[0] == 31.0
        assert samples[-1] == 60.0
        assert controller.last_temperature == 60.0

    async def test_non_numeric_and_non_finite_readings_ignored(
        self, controller, device_channel
    ) -> None:
        device_channel.publish_temperature(36.5)
        device_channel.publish_temperature("warm")
        device_channel.publish_temperature(float("nan"))
        device_channel.publish_temperature(float("inf"))

        assert controller.recent_temperatures == [36.5]
        assert controller.last_temperature == 36.5

    async def test_feed_error_keeps_subscription(self, controller, device_channel, caplog) -> None:
        device_channel.publish_error(ConnectionError("sensor timeout"))
        device_channel.publish_temperature(36.6)

        assert "sensor timeout" in caplog.text
        assert controller.last_temperature == 36.6


class TestTeardown:
    """Test suite for attach/close."""

    async def test_close_releases_subscriptions_and_timer(
        self, controller, device_channel
    ) -> None:
        await controller.start()
        assert device_channel.subscriber_count == 2

        await controller.close()

        assert device_channel.subscriber_count == 0
        assert controller.timer_running is False
        assert controller.state is SessionState.IDLE
        assert controller.is_attached is False

        device_channel.publish_temperature(40.0)
        assert controller.last_temperature == 37.0

    async def test_close_during_session_tells_device_to_stop(
        self, controller, device_channel, mock_repository
    ) -> None:
        await controller.start()

        await controller.close()

        assert device_channel.session_active is False
        assert device_channel.commands[-1].action == "stop"
        mock_repository.save.assert_not_awaited()

    async def test_close_when_idle_sends_nothing(self, controller, device_channel) -> None:
        await controller.close()

        assert device_channel.commands == []

    async def test_close_is_idempotent(self, controller) -> None:
        await controller.close()
        await controller.close()

        assert controller.is_attached is False

    async def test_attach_is_idempotent(self, controller, device_channel) -> None:
        controller.attach()

        assert device_channel.subscriber_count == 2

    async def test_async_context_manager(self, device_channel, mock_repository, user_id) -> None:
        async with SessionLifecycleController(
            auth=AuthContext(user_id=user_id),
            device=DeviceContext(channel=device_channel),
            repository=mock_repository,
        ) as controller:
            assert controller.is_attached is True
            await controller.start()

        assert device_channel.subscriber_count == 0
        assert controller.timer_running is False

    async def test_status_snapshot(self, controller) -> None:
        await controller.start()
        controller.tick()

        status = controller.status()

        assert status.state is SessionState.ACTIVE
        assert status.elapsed_display == "00:01"
        assert status.device_connected is True
        assert status.pending_record is None
        await controller.close()
