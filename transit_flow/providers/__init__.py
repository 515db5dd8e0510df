from .google_maps import Geocoder, DirectionsProvider, GoogleMapsClient

__all__ = ["Geocoder", "DirectionsProvider", "GoogleMapsClient"]
