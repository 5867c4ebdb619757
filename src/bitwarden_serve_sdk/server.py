"""
Supervisor for a local ``bw serve`` process.
"""

import logging
import subprocess
from typing import List, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_delay, wait_fixed

from .client import BitwardenClient
from .config import ClientConfig, ServeConfig
from .exceptions import ServerStartupError

logger = logging.getLogger(__name__)


class BitwardenServer:
    """
    Runs ``bw serve`` as a child process for the lifetime of the object.

    Usage::

        with BitwardenServer() as server, server.client() as client:
            client.unlock(password)
            login = client.get_login(item_id)
    """

    def __init__(
        self,
        config: Optional[ServeConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            config: Optional process configuration
            transport: Optional httpx transport used by the readiness probe
        """
        self.config = config or ServeConfig()
        self._transport = transport
        self._process: Optional[subprocess.Popen] = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def url(self) -> str:
        """Base URL of the served API."""
        return f"http://{self.config.host}:{self.config.port}"

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def command(self) -> List[str]:
        return [
            self.config.bw_path,
            "serve",
            "--hostname",
            self.config.host,
            "--port",
            str(self.config.port),
        ]

    def client(self, config: Optional[ClientConfig] = None) -> BitwardenClient:
        """Create a client bound to this server."""
        return BitwardenClient(self.url, config)

    def start(self) -> "BitwardenServer":
        """Spawn ``bw serve`` and block until it accepts connections."""
        if self._process is not None:
            return self

        logger.info(f"Starting bw serve on {self.url}")
        try:
            self._process = subprocess.Popen(self.command(), stdout=subprocess.DEVNULL)
        except OSError as e:
            raise ServerStartupError(f"Failed to run {self.config.bw_path}: {e}") from e

        try:
            self._wait_until_ready()
        except BaseException:
            self.close()
            raise

        logger.info(f"bw serve is listening on {self.url}")
        return self

    def _probe(self, client: httpx.Client) -> None:
        if self._process.poll() is not None:
            raise ServerStartupError(
                f"bw serve exited with code {self._process.returncode} before listening"
            )
        # Any HTTP answer means the socket is up.
        client.get(self.url + "/status")

    def _wait_until_ready(self) -> None:
        probe = retry(
            stop=stop_after_delay(self.config.startup_timeout),
            wait=wait_fixed(self.config.poll_interval),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )(self._probe)

        with httpx.Client(transport=self._transport, timeout=self.config.startup_timeout) as client:
            try:
                probe(client)
            except httpx.TransportError as e:
                raise ServerStartupError(
                    f"bw serve did not listen on {self.url} "
                    f"within {self.config.startup_timeout}s: {e}"
                ) from e

    def close(self) -> None:
        """Terminate the process, killing it if it does not exit in time."""
        if self._process is None:
            return

        process, self._process = self._process, None
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=self.config.shutdown_timeout)
            except subprocess.TimeoutExpired:
                logger.warning("bw serve ignored terminate, killing it")
                process.kill()
                process.wait()
        logger.info("bw serve stopped")
