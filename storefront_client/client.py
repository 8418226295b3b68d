"""
HTTP client for the WA Storefront API
"""

import requests
from typing import Dict, Any, Optional
from .exceptions import (
    StorefrontClientError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    ConnectionError
)

class StorefrontClient:
    """Low-level HTTP client for the storefront admin API"""

    def __init__(self, api_key: str, base_url: str = "http://localhost:8000", timeout: float = 30):
        """
        Initialize storefront client

        Args:
            api_key: Admin API key (starts with 'wsa_')
            base_url: API base URL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-API-Key": api_key
        })

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make HTTP request to API

        Raises:
            StorefrontClientError: On API error
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise ConnectionError("Request timeout", status_code=408)
        except requests.exceptions.ConnectionError as e:
            raise ConnectionError(f"Connection failed: {str(e)}", status_code=503)
        except requests.exceptions.RequestException as e:
            raise StorefrontClientError(f"Request failed: {str(e)}")

        if response.status_code >= 400:
            self._handle_error(response)

        return response.json()

    def _handle_error(self, response: requests.Response):
        """Handle API error responses"""
        try:
            error_data = response.json()
            message = error_data.get("detail", "Unknown error")
        except ValueError:
            message = response.text or f"HTTP {response.status_code}"

        if response.status_code == 401:
            raise AuthenticationError(message, status_code=401)
        elif response.status_code == 404:
            raise NotFoundError(message, status_code=404)
        elif response.status_code == 422:
            raise ValidationError(message, status_code=422)
        else:
            raise StorefrontClientError(message, status_code=response.status_code)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make GET request"""
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make POST request"""
        return self._request("POST", endpoint, json=json)

    def sign_upload(self, folder: str) -> Dict[str, Any]:
        """
        Ask the backend to sign a direct upload

        Returns:
            {cloudName, apiKey, timestamp, signature, folder, uploadPreset}
        """
        return self.get("/api/cloudinary/sign", params={"folder": folder})

    def storage_usage(self) -> Dict[str, Any]:
        """CDN storage usage against the configured capacity"""
        return self.get("/api/cloudinary/usage")

    def refresh_notifications(self) -> Dict[str, Any]:
        """Run the storage quota check now"""
        return self.post("/api/notifications/refresh")
