import pytest

from portfolio.core.config import Settings
from portfolio.schemas.contact import ContactRequest
from portfolio.services.mail_service import MailDeliveryError, MailService, build_contact_message, get_mailer


class FakeMailer:
    def __init__(self, error: Exception | None = None):
        self.sent = []
        self.error = error

    async def send_contact(self, contact):
        if self.error:
            raise self.error
        self.sent.append(contact)


@pytest.fixture
def mailer(app):
    fake = FakeMailer()
    app.dependency_overrides[get_mailer] = lambda: fake
    return fake


async def test_contact_sends_message(client, mailer):
    r = await client.post(
        "/api/contact", json={"name": "Ada", "email": "ada@example.com", "message": "Nice site"}
    )

    assert r.status_code == 200
    assert r.json() == {"message": "Message sent successfully!"}
    assert mailer.sent[0].name == "Ada"


async def test_contact_validates_email(client, mailer):
    r = await client.post("/api/contact", json={"name": "Ada", "email": "not-an-email", "message": "hi"})

    assert r.status_code == 422
    assert mailer.sent == []


async def test_contact_delivery_failure(app, client):
    app.dependency_overrides[get_mailer] = lambda: FakeMailer(error=MailDeliveryError("auth failed"))

    r = await client.post("/api/contact", json={"name": "Ada", "email": "ada@example.com", "message": "hi"})

    assert r.status_code == 500
    assert r.json() == {"message": "Failed to send message.", "error": "auth failed"}


def test_contact_message_is_addressed_to_owner_and_escaped():
    contact = ContactRequest(name="<b>Eve</b>", email="eve@example.com", message="a < b")

    msg = build_contact_message(contact, "owner@example.com")

    assert msg["From"] == "owner@example.com"
    assert msg["To"] == "owner@example.com"
    assert msg["Reply-To"] == "eve@example.com"
    assert msg["Subject"] == "New Contact Form Submission from <b>Eve</b>"
    html_body = msg.get_body(preferencelist=("html",)).get_content()
    assert "&lt;b&gt;Eve&lt;/b&gt;" in html_body
    assert "a &lt; b" in html_body


async def test_mail_service_requires_credentials():
    service = MailService(Settings(email_user="", email_pass=""))
    contact = ContactRequest(name="Ada", email="ada@example.com", message="hi")

    with pytest.raises(MailDeliveryError):
        await service.send_contact(contact)
