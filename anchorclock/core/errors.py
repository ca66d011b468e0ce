class ClockError(Exception):
    """
    Base class for every error raised by the clock and its time sources.
    """

class NotInitializedError(ClockError):
    def __init__(self):
        super().__init__("The clock has not been initialized. Call initialize() first.")

class AlreadyInitializedError(ClockError):
    def __init__(self):
        super().__init__("The clock has already been initialized. Initialization may only occur once.")

class NetworkTimeUnavailableError(ClockError):
    """
    Raised when no configured time server produced a usable timestamp.
    Carries the configured server string for diagnostics.
    """
    def __init__(self, servers: str):
        self.servers = servers
        super().__init__(f"Unable to retrieve a valid response from any of the following servers: '{servers}'")
