"""Collector contract and the prometheus_client bridge.

A :class:`Collector` pushes :class:`Sample` objects into a sink.  The
:class:`NodeCollector` is the one object registered with a
``prometheus_client`` registry: on every scrape it runs each collector,
groups the samples into metric families, and reports per-collector
scrape duration and success.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

from prometheus_client.core import GaugeMetricFamily, Metric

from ..sysfs.attribute import SysfsError

log = logging.getLogger(__name__)


class NoDataError(Exception):
    """The collector ran successfully but had nothing to report."""


@dataclass(frozen=True)
class GaugeDesc:
    """Name, help text and label names of one gauge."""

    name: str
    documentation: str
    labelnames: tuple[str, ...] = ()

    def sample(self, value: float, *labels: str) -> Sample:
        if len(labels) != len(self.labelnames):
            raise ValueError(
                f"{self.name}: expected {len(self.labelnames)} label values, "
                f"got {len(labels)}"
            )
        return Sample(self, float(value), labels)

    def family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            self.name, self.documentation, labels=list(self.labelnames)
        )


class Sample(NamedTuple):
    """One value of a gauge for one set of label values."""

    desc: GaugeDesc
    value: float
    labels: tuple[str, ...]


Sink = Callable[[Sample], None]


class Collector:
    """Base class for collectors.

    Subclasses set ``name`` and ``descs`` and implement :meth:`update`.
    """

    name: str = ""
    descs: tuple[GaugeDesc, ...] = ()

    def update(self, sink: Sink) -> None:
        """Push a fresh set of samples into ``sink``.

        Raises:
            NoDataError: Nothing to report this cycle.
            SysfsError: The underlying read failed.
        """
        raise NotImplementedError


def build_families(samples: Iterable[Sample]) -> list[GaugeMetricFamily]:
    """Group samples into one GaugeMetricFamily per gauge, in first-seen order."""
    families: dict[str, GaugeMetricFamily] = {}
    for sample in samples:
        family = families.get(sample.desc.name)
        if family is None:
            family = families[sample.desc.name] = sample.desc.family()
        family.add_metric(list(sample.labels), sample.value)
    return list(families.values())


class NodeCollector:
    """Runs a set of collectors for each scrape.

    Register an instance with a ``prometheus_client`` registry.  A failing
    collector is logged and reported through the scrape success gauge; it
    never fails the whole scrape.
    """

    def __init__(self, collectors: Iterable[Collector], namespace: str = "node") -> None:
        self._collectors = list(collectors)
        self._duration = GaugeDesc(
            f"{namespace}_scrape_collector_duration_seconds",
            "Duration of a collector scrape.",
            ("collector",),
        )
        self._success = GaugeDesc(
            f"{namespace}_scrape_collector_success",
            "Whether a collector succeeded.",
            ("collector",),
        )

    def describe(self) -> Iterator[Metric]:
        yield self._duration.family()
        yield self._success.family()
        for collector in self._collectors:
            for desc in collector.descs:
                yield desc.family()

    def collect(self) -> Iterator[Metric]:
        samples: list[Sample] = []
        scrape: list[Sample] = []
        for collector in self._collectors:
            ok, collected, duration = self._run(collector)
            samples.extend(collected)
            scrape.append(self._duration.sample(duration, collector.name))
            scrape.append(self._success.sample(1 if ok else 0, collector.name))
        yield from build_families(samples)
        yield from build_families(scrape)

    def _run(self, collector: Collector) -> tuple[bool, list[Sample], float]:
        collected: list[Sample] = []
        start = time.monotonic()
        ok = True
        try:
            collector.update(collected.append)
        except NoDataError as exc:
            log.debug("collector returned no data: name=%s %s", collector.name, exc)
        except SysfsError as exc:
            log.error("collector failed: name=%s err=%s", collector.name, exc)
            ok = False
            collected = []
        duration = time.monotonic() - start
        log.debug(
            "collector finished: name=%s duration_seconds=%.6f", collector.name, duration
        )
        return ok, collected, duration
