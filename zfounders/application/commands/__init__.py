"""Write-side handlers, one package per area."""
