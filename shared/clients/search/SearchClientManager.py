from shared.helper.HelperConfig import HelperConfig
from shared.clients.search.SearchClientInterface import SearchClientInterface


class SearchClientManager:
    """Resolves SEARCH_ENGINE to a backend client.

    Each engine lives in ``shared/clients/search/<engine>/SearchClient<Engine>.py``,
    so adding a backend means adding that module and nothing here.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """Normalise SEARCH_ENGINE to the class-name suffix of its client.

        "OpenSearch", "opensearch" and " OPENSEARCH " all resolve to "Opensearch",
        matching ``SearchClientOpensearch`` in the ``opensearch`` package.

        Raises:
            ValueError: If SEARCH_ENGINE is not set or empty.
        """
        engine = self.helper_config.get_string_val("SEARCH_ENGINE")
        if not engine:
            raise ValueError("No search engine specified in configuration (SEARCH_ENGINE).")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> SearchClientInterface:
        """Import the engine module lazily, so only the configured backend is loaded.

        Raises:
            ValueError: If no client module or class exists for the engine.
        """
        engine = self._get_engine_from_env()
        class_name = f"SearchClient{engine}"
        module_path = f"shared.clients.search.{engine.lower()}.{class_name}"
        try:
            module = __import__(module_path, fromlist=[class_name])
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported search engine '{engine}': no {class_name} in {module_path} ({e}).")
        client = client_class(helper_config=self.helper_config)
        self.logging.info("Using search engine %s at %s", engine, client._get_base_url())
        return client

    def get_client(self) -> SearchClientInterface:
        return self.client
