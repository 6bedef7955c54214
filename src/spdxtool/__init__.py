"""spdxtool - SPDX license and copyright header management."""
