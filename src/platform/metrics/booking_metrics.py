from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Session Booking Core Metrics Collector

    Tracks booking outcomes and per-session seat availability
    """

    def __init__(self):
        # ========== Booking Business Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking requests',
            ['result'],  # result: success/not_found/invalid_state/capacity_exceeded/conflict
        )

        self.booking_duration = Histogram(
            'booking_duration_seconds',
            'Booking transaction duration',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.booking_cancellations = Counter(
            'booking_cancellations_total',
            'Total booking cancellations',
            ['result'],
        )

        self.session_available_seats = Gauge(
            'session_available_seats',
            'Seats still available per session',
            ['session_id'],
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.observe(duration)

    def record_cancellation(self, *, result: str) -> None:
        self.booking_cancellations.labels(result=result).inc()

    def update_available_seats(self, *, session_id: str, available_seats: int) -> None:
        self.session_available_seats.labels(session_id=session_id).set(available_seats)

    def forget_session(self, *, session_id: str) -> None:
        try:
            self.session_available_seats.remove(session_id)
        except KeyError:
            # Never observed by this process
            pass


# Global metrics instance
metrics = BookingMetrics()
