"""cockpitbind - input binding to actuator command router for cockpit scripting."""

__version__ = "0.1.0"
