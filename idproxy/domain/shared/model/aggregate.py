from idproxy.domain.shared.model.entity import Entity


class Aggregate(Entity):
    """Consistency boundary: loaded and saved as a whole by its repository."""
