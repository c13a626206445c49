from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """Identity and endpoint every store call is made with."""

    user_email: str
    token: str
    api_base_url: str

    @property
    def user_name(self):
        return self.user_email.split("@")[0].title()

    def is_configured(self):
        return bool(self.user_email and self.token and self.api_base_url)
