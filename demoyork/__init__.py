"""DemoYork API: users and categories behind session-cookie auth and role levels."""
