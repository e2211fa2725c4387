import logging
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)

PROVIDER = "OpenAI"
API_BASE_URL = "https://api.openai.com/v1"
CHAT_COMPLETIONS_PATH = "/chat/completions"

DEFAULT_MODEL = "gpt-4o"
VALID_MODELS = ("gpt-3.5-turbo", "gpt-4", "gpt-4-turbo", "gpt-4o")

DEFAULT_TIMEOUT = 60


class UnexpectedResponseError(ValueError):
    """A 2xx response whose body has no choices[0].message.content."""


@dataclass(frozen=True)
class Options:
    apikey: str
    model: str | None = DEFAULT_MODEL
    from_lang: str = "Chinese"
    to_lang: str = "English"


def build_prompt(from_lang: str, to_lang: str) -> str:
    """System instruction: normalize text already in to_lang, translate text in from_lang."""
    return (
        f"You will be provided with statements, if it’s an {to_lang} statement, "
        f"your task is to convert them to standard {to_lang}, if it’s a {from_lang} "
        f"statement, your task is to translate them into standard {to_lang}."
    )


def build_messages(text: str, options: Options) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": build_prompt(options.from_lang, options.to_lang)},
        {"role": "user", "content": text.strip()},
    ]


def build_request(text: str, options: Options) -> dict:
    """JSON body for the chat-completion endpoint."""
    return {
        "model": options.model or DEFAULT_MODEL,
        "messages": build_messages(text, options),
    }


def extract_content(data) -> str:
    """Pull choices[0].message.content out of a chat-completion response body."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise UnexpectedResponseError(
            f"Unexpected response from {PROVIDER}: missing choices[0].message.content"
        ) from e
    if not isinstance(content, str):
        raise UnexpectedResponseError(
            f"Unexpected response from {PROVIDER}: message content is not text"
        )
    return content


def get_error_info(error: BaseException) -> str:
    """Human-readable message for a failed completion call.

    Errors carrying an HTTP response are reported with the status code and the
    provider's own error message; anything else falls back to str(error).
    """
    response = getattr(error, "response", None)
    if response is None:
        return str(error)

    status = response.status_code
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, IndexError, TypeError):
        message = response.reason or response.text
    if not message:
        return str(error)
    return f"Message from {PROVIDER} (code {status}): {message}"


class Translator:
    """Sends chat-completion requests to the OpenAI API."""

    def __init__(
        self,
        apikey: str,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = API_BASE_URL,
        session: requests.Session | None = None,
    ):
        """
        Args:
            apikey: OpenAI API key, sent as a bearer token.
            timeout: Seconds to wait for the API before giving up.
            base_url: API root, without the endpoint path.
            session: Optional session to reuse (mainly for tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {apikey}"})

    def complete(self, body: dict) -> str:
        """POST a chat request and return the first choice's content.

        Raises:
            requests.HTTPError: non-2xx response (carries .response).
            requests.RequestException: transport failure (no response).
            UnexpectedResponseError: 2xx body without the expected fields.
        """
        url = f"{self.base_url}{CHAT_COMPLETIONS_PATH}"
        logger.debug(f"POST {url} (model: {body.get('model')})")

        response = self.session.post(url, json=body, timeout=self.timeout)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise UnexpectedResponseError(
                f"Unexpected response from {PROVIDER}: body is not JSON"
            ) from e

        content = extract_content(data)
        logger.debug(f"Completion received ({len(content)} chars)")
        return content
