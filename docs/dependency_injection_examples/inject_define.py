import depkit
from depkit import DependencyValues, InjectedStateObject


class AppValues(DependencyValues):
    base_url: str


class Session:
    def __init__(self, user):
        self.user = user
        self.changes = 0

    def notify_changed(self):
        self.changes += 1


@depkit.define
class ProfileScreen:
    title: str
    session: Session = depkit.field(Session, kind=InjectedStateObject)
    base_url: str = depkit.field(AppValues.base_url)


if __name__ == "__main__":
    app_registry = depkit.reinitialize()
    app_registry.register(Session("ada"))
    app_registry.register_by_path("https://api.example.com", AppValues.base_url)

    screen = ProfileScreen(title="Profile")
    assert screen.session.user == "ada"
    assert screen.base_url == "https://api.example.com"

    # components compare by identity
    assert screen != ProfileScreen(title="Profile")

    # an explicit argument bypasses the registry
    other = ProfileScreen(title="Other", session=Session("grace"))
    assert other.session.user == "grace"

    print("inject_define example passed!")
