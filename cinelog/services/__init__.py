"""Services applicatifs de CineLog."""
