# Add imports
from depkit import Dependency, DependencyValues, InjectedViewModel, inject, registry


# Declare the configuration values the app needs, addressed by path
class AppValues(DependencyValues):
    base_url: str
    greeting: str


class MessageStore:
    def __init__(self):
        self.messages = []


# Initialize the shared Registry and populate it at startup
app_registry = registry.reinitialize()
app_registry.register(MessageStore())
app_registry.register_by_path("https://api.example.com", AppValues.base_url)
app_registry.register_by_path("Bonjour", AppValues.greeting)


# Components declare what they need; @inject.component resolves it
# before __init__ runs.
@inject.component
class MessageBuilder:
    store = inject.view_model(MessageStore)
    greeting = inject.dependency(AppValues.greeting)

    def get_message(self):
        message = f"{self.greeting}! I was initialized with dependency injection."
        self.store.messages.append(message)
        return message


message = MessageBuilder().get_message()
print(message)

assert message == "Bonjour! I was initialized with dependency injection."
# Every accessor sees the same store
assert InjectedViewModel(MessageStore).value.messages == [message]
assert Dependency(AppValues.base_url).value == "https://api.example.com"
