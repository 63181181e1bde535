"""Unit tests for the logging device facade."""

from cockpitbind.router.device import DeviceCall, LoggingDevice
from cockpitbind.router.router import KeybindRouter


class TestLoggingDevice:
    """Tests for LoggingDevice."""

    def test_records_calls(self):
        """Test that every facade call is recorded in order."""
        device = LoggingDevice()
        device.listen_for(1)
        device.perform_action(10, 0.5, True)
        device.dispatch_external(1, 0.5)

        assert device.listened == [1]
        assert device.calls == [
            DeviceCall("perform_action", 10, 0.5, True),
            DeviceCall("dispatch_external", 1, 0.5),
        ]
        assert device.actions() == [DeviceCall("perform_action", 10, 0.5, True)]
        assert device.mirrors() == [DeviceCall("dispatch_external", 1, 0.5)]

    def test_drives_router(self):
        """Test a router dry run against the logging device."""
        device = LoggingDevice(name="lights")
        router = KeybindRouter(device)
        router.register(3001, cycle_key=1501, values=[0, 1], mirror_to_external=True)

        router.dispatch(1501)
        router.dispatch(3001, 0.2)

        assert device.listened == [1501]
        assert device.actions() == [DeviceCall("perform_action", 3001, 1, True)]
        assert [c.value for c in device.mirrors()] == [1, 0]
