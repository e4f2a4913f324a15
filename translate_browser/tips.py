def browser_tips(filter_hint: str = "", confirming: bool = False, in_flight: bool = False) -> str:
    """Format tips line for the browser view."""
    if in_flight:
        return "Renommage en cours, patientez..."
    if confirming:
        return "Astuces: Entrée=confirmer, Échap=annuler"
    base = "Astuces: Entrée=renommer, →=ouvrir, ←=parent, tapez pour filtrer, Ctrl+Q=quitter"
    return base + (filter_hint or "")
