"""
Column packing for appointments that share a time window on the same day.

Pure domain logic: no rendering, no I/O.
"""

from typing import Dict, List, Sequence

from .models import ColumnSlot, TimedAppointment


class OverlapResolver:
    """
    Assigns each appointment of a day a lane so overlapping appointments are
    drawn side by side.

    Algorithm:
    1. Sort by start time, ties broken by id
    2. Group into connected components of the intersection graph
       (half-open test, touching endpoints do not overlap)
    3. column_count = size of the component the appointment belongs to
    4. column_index = position inside the component by (start, id)

    This allocates one lane per component member rather than the minimal
    number of lanes (the maximum simultaneous depth), so a staggered chain
    A-B-C where A and C never meet still gets three lanes.
    """

    def resolve(self, intervals: Sequence[TimedAppointment]) -> Dict[str, ColumnSlot]:
        """
        Compute lanes for all appointments of one day.

        Args:
            intervals: Validated appointments, all on the same calendar day

        Returns:
            Dict mapping appointment id to its ColumnSlot; one entry per input
        """
        slots: Dict[str, ColumnSlot] = {}

        for cluster in self.clusters(intervals):
            count = len(cluster)
            for index, member in enumerate(cluster):
                slots[member.id] = ColumnSlot(column_index=index, column_count=count)

        return slots

    def clusters(self, intervals: Sequence[TimedAppointment]) -> List[List[TimedAppointment]]:
        """
        Partition intervals into overlap clusters, each ordered by (start, id).

        After sorting by start, an interval joins the current cluster iff it
        starts before the cluster's furthest end; this yields exactly the
        connected components of the interval intersection graph.
        """
        ordered = sorted(intervals, key=self._sort_key)
        clusters: List[List[TimedAppointment]] = []
        cluster_end = None

        for interval in ordered:
            if clusters and interval.start_minutes < cluster_end:
                clusters[-1].append(interval)
                cluster_end = max(cluster_end, interval.end_minutes)
            else:
                clusters.append([interval])
                cluster_end = interval.end_minutes

        return clusters

    @staticmethod
    def _sort_key(interval: TimedAppointment):
        return interval.start_minutes, interval.id
