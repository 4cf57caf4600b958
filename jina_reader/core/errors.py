class SlashCommandError(Exception):
    """Raised by the command handler; str(exc) is the message shown to the user"""

class UnknownCommand(SlashCommandError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown slash command: {name}")

class MissingArgument(SlashCommandError):
    def __init__(self):
        super().__init__("Please provide a URL.")

class UnknownInvocation(SlashCommandError):
    def __init__(self, invocation_id: str):
        self.invocation_id = invocation_id
        super().__init__(f"Unknown invocation: {invocation_id}")

class FetchError(Exception):
    """Raised by fetchers; str(exc) is the message propagated to the user"""

class TransportFailure(FetchError):
    pass

class DecodeFailure(FetchError):
    pass
