"""StayPoint vacation-rental marketplace backend."""
