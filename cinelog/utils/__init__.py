"""Utilitaires partages (constantes, fonctions d'aide)."""
