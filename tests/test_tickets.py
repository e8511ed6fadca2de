from flight_operations.tickets import FARE_TABLE, Ticket, TicketClass, TicketStatus


def make_ticket(ticket_class=TicketClass.ECONOMY):
    return Ticket("TKT00000001", "AA100", "p1", ticket_class)


def test_fare_comes_from_class():
    assert make_ticket().fare == 200.0
    assert make_ticket(TicketClass.BUSINESS).fare == 500.0
    assert make_ticket(TicketClass.FIRST_CLASS).fare == 1000.0
    assert TicketClass.ECONOMY < TicketClass.BUSINESS < TicketClass.FIRST_CLASS


def test_lifecycle_reserved_confirmed_checked_in():
    ticket = make_ticket()

    assert ticket.check_in() is False
    assert ticket.confirm() is True
    assert ticket.confirm() is False
    assert ticket.check_in() is True
    assert ticket.is_checked_in
    assert ticket.cancel() is False
    assert ticket.status is TicketStatus.CHECKED_IN


def test_cancel_before_check_in():
    ticket = make_ticket()
    ticket.confirm()

    assert ticket.cancel() is True
    assert ticket.status is TicketStatus.CANCELLED
    assert ticket.cancel() is True
    assert ticket.check_in() is False
    assert ticket.add_bag() is False


def test_upgrade_to_higher_class_recomputes_fare():
    ticket = make_ticket()

    assert ticket.upgrade(TicketClass.BUSINESS) is True
    assert ticket.fare == 500.0
    assert ticket.ticket_class is TicketClass.BUSINESS

    assert ticket.upgrade(TicketClass.ECONOMY) is False
    assert ticket.upgrade(TicketClass.BUSINESS) is False
    assert ticket.fare == 500.0
    assert ticket.ticket_class is TicketClass.BUSINESS

    assert ticket.upgrade(TicketClass.FIRST_CLASS) is True
    assert ticket.fare == FARE_TABLE[TicketClass.FIRST_CLASS]


def test_upgrade_refused_after_check_in_or_cancel():
    checked_in = make_ticket()
    checked_in.confirm()
    checked_in.check_in()
    cancelled = make_ticket()
    cancelled.cancel()

    assert checked_in.upgrade(TicketClass.FIRST_CLASS) is False
    assert cancelled.upgrade(TicketClass.FIRST_CLASS) is False
    assert cancelled.fare == 200.0


def test_bags_are_counted():
    ticket = make_ticket()
    ticket.add_bag()
    ticket.add_bag()
    assert ticket.bags == 2
