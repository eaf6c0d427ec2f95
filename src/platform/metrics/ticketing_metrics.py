from prometheus_client import Counter, Gauge, Histogram


class TicketingMetrics:
    """
    Ticketing Core Metrics Collector

    Tracks ticket lifecycle transitions, seat holds and inventory generation
    """

    def __init__(self):
        # ========== Ticket Lifecycle Metrics ==========
        self.ticket_transitions = Counter(
            'ticket_transitions_total',
            'Ticket lifecycle transitions',
            ['from_status', 'to_status', 'result'],  # result: success/conflict
        )

        self.tickets_generated = Counter(
            'tickets_generated_total',
            'Ticket rows generated at event creation',
            ['kind'],  # kind: sectioned/general_admission
        )

        self.expired_holds_released = Counter(
            'ticket_expired_holds_released_total',
            'Reserved tickets returned to available by the hold sweeper',
        )

        # ========== Seat Reservation Metrics ==========
        self.seat_reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Seat reservation requests',
            ['result'],
        )

        self.seat_reservation_size = Histogram(
            'seat_reservation_size_seats',
            'Number of seats per reservation request',
            buckets=[1, 2, 4, 8, 16, 32, 64],
        )

        # ========== QR Validation Metrics ==========
        self.qr_validations = Counter(
            'ticket_qr_validations_total',
            'QR token validations',
            ['result'],  # valid/forged/expired/not_found/wrong_status
        )

        self.database_connections_active = Gauge(
            'database_connections_active',
            'Active database connections',
            ['service', 'database_type'],
        )

    # ========== Helper Methods ==========

    def record_ticket_transition(self, *, from_status: str, to_status: str, result: str):
        self.ticket_transitions.labels(
            from_status=from_status, to_status=to_status, result=result
        ).inc()

    def record_tickets_generated(self, *, kind: str, count: int):
        self.tickets_generated.labels(kind=kind).inc(count)

    def record_expired_holds(self, *, count: int):
        self.expired_holds_released.inc(count)

    def record_seat_reservation(self, *, result: str, count: int):
        self.seat_reservation_requests.labels(result=result).inc()
        self.seat_reservation_size.observe(count)

    def record_qr_validation(self, *, result: str):
        self.qr_validations.labels(result=result).inc()


# Global metrics instance
metrics = TicketingMetrics()
