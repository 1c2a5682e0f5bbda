"""Text recognition through the Baidu OCR HTTP API.

The client exchanges an application's API key and secret key for an access
token once, at construction, and then posts base64-encoded images to the
general recognition endpoint.

See https://ai.baidu.com/ai-doc/OCR/dk3iqnq51 for obtaining the keys.
"""

import base64
import logging
from typing import List, Optional

from pyrequests.errors import OCRError, RequestsError
from pyrequests.http.params import URLParam
from pyrequests.session import Session

logger = logging.getLogger(__name__)

TOKEN_URL = "https://aip.baidubce.com/oauth/2.0/token"
RECOGNIZE_URL = "https://aip.baidubce.com/rest/2.0/ocr/v1/general_basic"


class OCRClient:
    """Baidu OCR client.

    Attributes:
        token: Access token obtained from the token endpoint
    """

    def __init__(self, api_key: str, secret_key: str, session: Optional[Session] = None):
        """Initialize the client and fetch an access token.

        Args:
            api_key: Application API key
            secret_key: Application secret key
            session: Session used for both calls (a plain Session by default)

        Raises:
            OCRError: If the token cannot be obtained
        """
        self.api_key = api_key
        self.secret_key = secret_key
        self.session = session or Session()
        self.token = self._fetch_token()

    def _fetch_token(self) -> str:
        data = URLParam()
        data.add("grant_type", "client_credentials")
        data.add("client_id", self.api_key)
        data.add("client_secret", self.secret_key)

        try:
            response = self.session.post(TOKEN_URL, data)
            token = response.json_value("access_token")
        except RequestsError as e:
            raise OCRError(f"Token request failed: {e}") from e

        if not token:
            raise OCRError(f"No access_token in token response: {response.text()}")

        logger.debug("Obtained OCR access token")
        return str(token)

    def recognize_lines(self, image: bytes) -> List[str]:
        """Recognize the text lines of an image.

        Args:
            image: Raw image bytes (JPEG, PNG, BMP)

        Returns:
            Recognized lines in reading order

        Raises:
            OCRError: If the request fails or the result is malformed
        """
        data = URLParam()
        data.add("access_token", self.token)
        data.add("image", base64.b64encode(image).decode('ascii'))

        try:
            response = self.session.post(RECOGNIZE_URL, data)
            result = response.json()
        except RequestsError as e:
            raise OCRError(f"Recognition request failed: {e}") from e

        words_result = result.get("words_result")
        if not isinstance(words_result, list):
            raise OCRError(f"No words_result in OCR response: {response.text()}")

        try:
            return [str(item["words"]) for item in words_result]
        except (KeyError, TypeError) as e:
            raise OCRError(f"Malformed words_result entry: {e}") from e

    def recognize(self, image: bytes) -> str:
        """Recognize an image and return the lines joined, each ending with a newline."""
        return ''.join(f"{line}\n" for line in self.recognize_lines(image))
