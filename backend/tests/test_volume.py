"""Tests for monthly volume buckets, port rankings and last shipment date."""

from __future__ import annotations

from datetime import date

from bol_enrichment.core.metrics import build_monthly_volume, last_shipment_date, top_ports
from bol_enrichment.schemas.enrichment import ContainerClass, NormalizedShipment

TODAY = date(2026, 10, 19)


class TestMonthlyVolume:
    def test_always_twelve_buckets_ending_this_month(self) -> None:
        buckets = build_monthly_volume([], TODAY)
        assert len(buckets) == 12
        assert buckets[0].month == "2025-11"
        assert buckets[-1].month == "2026-10"
        assert buckets[-1].label == "Oct"
        assert all(b.total == 0 and b.shipments == 0 for b in buckets)

    def test_window_crosses_year_boundary(self) -> None:
        buckets = build_monthly_volume([], date(2026, 2, 1))
        assert [b.month for b in buckets][:3] == ["2025-03", "2025-04", "2025-05"]
        assert buckets[-1].month == "2026-02"

    def test_teu_added_to_class_bucket(self) -> None:
        shipments = [
            NormalizedShipment(
                shipment_date=date(2026, 9, 3),
                container_class=ContainerClass.FCL,
                teu=2,
                teu_reported=True,
            ),
            NormalizedShipment(
                shipment_date=date(2026, 9, 20),
                container_class=ContainerClass.LCL,
                teu=0.5,
                teu_reported=True,
            ),
        ]
        september = build_monthly_volume(shipments, TODAY)[-2]
        assert september.month == "2026-09"
        assert september.fcl == 2
        assert september.lcl == 0.5
        assert september.total == 2.5
        assert september.shipments == 2

    def test_fcl_without_teu_counts_as_one(self) -> None:
        shipments = [
            NormalizedShipment(shipment_date=date(2026, 10, 1), container_class=ContainerClass.FCL)
        ]
        assert build_monthly_volume(shipments, TODAY)[-1].fcl == 1

    def test_out_of_window_and_undated_dropped(self) -> None:
        shipments = [
            NormalizedShipment(shipment_date=date(2025, 10, 31), container_class=ContainerClass.FCL),
            NormalizedShipment(shipment_date=date(2026, 11, 1), container_class=ContainerClass.FCL),
            NormalizedShipment(container_class=ContainerClass.FCL),
        ]
        buckets = build_monthly_volume(shipments, TODAY)
        assert sum(b.shipments for b in buckets) == 0


class TestTopPorts:
    def test_ranked_by_count(self) -> None:
        shipments = [NormalizedShipment(origin_port=p) for p in
                     ["Ningbo", "Shanghai", "Shanghai", "Busan", "Shanghai", "Busan", "Yantian"]]
        assert top_ports(shipments, "origin_port") == ["Shanghai", "Busan", "Ningbo"]

    def test_ties_keep_first_seen_order(self) -> None:
        shipments = [NormalizedShipment(destination_port=p) for p in
                     ["Savannah", "Oakland", "Newark", "Houston"]]
        assert top_ports(shipments, "destination_port") == ["Savannah", "Oakland", "Newark"]

    def test_unknown_ports_ignored(self) -> None:
        shipments = [NormalizedShipment(), NormalizedShipment(origin_port="Busan")]
        assert top_ports(shipments, "origin_port") == ["Busan"]


class TestLastShipmentDate:
    def test_latest(self) -> None:
        shipments = [
            NormalizedShipment(shipment_date=date(2026, 1, 5)),
            NormalizedShipment(shipment_date=date(2026, 6, 1)),
            NormalizedShipment(),
        ]
        assert last_shipment_date(shipments) == date(2026, 6, 1)

    def test_none_when_undated(self) -> None:
        assert last_shipment_date([NormalizedShipment()]) is None
