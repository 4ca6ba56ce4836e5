def compact_order(items, order_field="order"):
    """
    Re-assigns sequential order values (0..N-1), keeping the current relative
    order. Ties keep their incoming position.
    """
    ordered = sorted(items, key=lambda item: getattr(item, order_field))

    for index, item in enumerate(ordered):
        if getattr(item, order_field) != index:
            setattr(item, order_field, index)

    return ordered
