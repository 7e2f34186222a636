"""Probing targets concurrently and rendering the outcome of each probe."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable, Iterable, Iterator

from caduceus.certs import certificate_info, get_ssl_cert
from caduceus.models import Result, ScrapeArgs
from caduceus.targets import is_valid_domain, is_wildcard

Prober = Callable[[str, float], Result]

_DONE = object()


def probe(target: str, timeout: float) -> Result:
    """Fetch the certificate served at target and describe the outcome."""
    try:
        der = get_ssl_cert(target, timeout)
        info = certificate_info(target, der)
    except TimeoutError:
        return Result(ip=target, timeout=True)
    except Exception as exc:  # every failure is reported, not raised
        return Result(ip=target, error=exc)
    return Result(ip=target, hit=True, certificate=info)


def _host_part(origin: str) -> str:
    colon = origin.rfind(":")
    return origin if colon == -1 else origin[:colon]


def render_result(result: Result, args: ScrapeArgs) -> list[str]:
    """Return the output lines for one probe result."""
    if result.hit and result.certificate is not None:
        certificate = result.certificate
        if args.json_output:
            return [certificate.to_json()]
        host = _host_part(certificate.origin_ip)
        lines: list[str] = []
        seen: set[str] = set()
        for domain in certificate.domains:
            if domain in seen:
                continue
            seen.add(domain)
            if args.print_wildcards:
                if is_wildcard(domain) or is_valid_domain(domain):
                    lines.append(f"{domain} {host}")
                    continue
            if is_valid_domain(domain) and not is_wildcard(domain):
                lines.append(f"{domain} {host}")
        return lines

    lines = []
    if args.debug:
        if result.timeout:
            lines.append(f"Timed Out. No SSL certificate found for {result.ip}")
        if result.error is not None:
            lines.append(f"Failed to get SSL certificate from {result.ip}: {result.error}")
    return lines


class WorkerPool:
    """A fixed set of threads probing targets in parallel."""

    def __init__(self, size: int, timeout: float, prober: Prober = probe) -> None:
        if size < 1:
            raise ValueError("worker pool size must be at least 1")
        self.size = size
        self.timeout = timeout
        self._prober = prober

    def run(self, targets: Iterable[str]) -> Iterator[Result]:
        """Probe every target and yield results as they complete.

        An exception raised while producing targets stops the run and is
        re-raised once the workers have finished.
        """
        inbox: queue.Queue = queue.Queue(maxsize=self.size * 2)
        outbox: queue.Queue = queue.Queue()
        failures: list[BaseException] = []
        stop = threading.Event()

        def feed() -> None:
            try:
                for target in targets:
                    if stop.is_set():
                        break
                    inbox.put(target)
            except Exception as exc:
                failures.append(exc)
                stop.set()
            finally:
                for _ in range(self.size):
                    inbox.put(_DONE)

        def work() -> None:
            while True:
                target = inbox.get()
                if target is _DONE:
                    break
                if stop.is_set():
                    continue
                try:
                    result = self._prober(target, self.timeout)
                except Exception as exc:
                    result = Result(ip=target, error=exc)
                outbox.put(result)
            outbox.put(_DONE)

        feeder = threading.Thread(target=feed, daemon=True)
        workers = [threading.Thread(target=work, daemon=True) for _ in range(self.size)]
        feeder.start()
        for worker in workers:
            worker.start()

        try:
            finished = 0
            while finished < self.size:
                item = outbox.get()
                if item is _DONE:
                    finished += 1
                    continue
                yield item
        finally:
            stop.set()

        feeder.join()
        for worker in workers:
            worker.join()
        if failures:
            raise failures[0]