import httpx

from checkout_engine.shared.decorators import log_errors


class SupabaseRestError(Exception):
    """Raised when the Supabase REST API returns a non-2xx response."""


class SupabaseRestClient:
    """Thin httpx wrapper for the Supabase PostgREST endpoint."""

    REST_PATH = "/rest/v1/"

    def __init__(self, client: httpx.Client, base_url: str, api_key: str) -> None:
        self._client = client
        self._endpoint = base_url.rstrip("/") + self.REST_PATH
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }

    @log_errors
    def select(self, table: str, params: dict[str, str]) -> list[dict]:
        """GET rows of ``table`` filtered by PostgREST query ``params``.

        Raises:
            SupabaseRestError: on non-2xx HTTP responses.
        """
        response = self._client.get(
            self._endpoint + table, headers=self._headers, params=params
        )

        if not response.is_success:
            raise SupabaseRestError(
                f"Supabase error {response.status_code} on {table}: {response.text}"
            )

        return response.json()
