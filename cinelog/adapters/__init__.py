"""
Adaptateurs : implementations concretes des ports.

- json_files : journal et annuaire des lieux lus depuis des fichiers JSON
- api : journal et annuaire des lieux servis par une API HTTP
"""
