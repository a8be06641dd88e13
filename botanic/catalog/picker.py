"""
Nutrient multi-select state used by the product editor
"""

NO_SELECTION_LABEL = 'Seleccionar nutrientes...'
SINGLE_SELECTION_LABEL = '1 nutriente seleccionado'
NO_MATCHES_MESSAGE = 'No se encontraron nutrientes'
NO_NUTRIENTS_MESSAGE = 'No hay nutrientes disponibles'


class NutrientPicker:
    """
    Holds the selected nutrient IDs (in selection order) and a text filter.

    `nutrients` is any sequence of objects with `id` and `name`. Filtering
    only narrows what is shown; it never changes the selection.
    """

    def __init__(self, nutrients, selected_ids=(), query=''):
        self.nutrients = list(nutrients)
        self.query = query or ''
        self.selected_ids = []
        for nutrient_id in selected_ids:
            if nutrient_id not in self.selected_ids:
                self.selected_ids.append(nutrient_id)

    def filtered(self):
        """Nutrients whose name contains the query, case-insensitively"""
        needle = self.query.lower()
        if not needle:
            return list(self.nutrients)
        return [n for n in self.nutrients if needle in n.name.lower()]

    def toggle(self, nutrient_id):
        if nutrient_id in self.selected_ids:
            self.selected_ids.remove(nutrient_id)
        else:
            self.selected_ids.append(nutrient_id)
        return self.selected_ids

    def clear(self):
        self.query = ''
        self.selected_ids = []

    def is_selected(self, nutrient_id):
        return nutrient_id in self.selected_ids

    def selected_nutrients(self):
        by_id = {n.id: n for n in self.nutrients}
        return [by_id[i] for i in self.selected_ids if i in by_id]

    def button_label(self):
        count = len(self.selected_ids)
        if count == 0:
            return NO_SELECTION_LABEL
        if count == 1:
            selected = self.selected_nutrients()
            return selected[0].name if selected else SINGLE_SELECTION_LABEL
        return f'{count} nutrientes seleccionados'

    def empty_message(self):
        """Message shown when the list is empty, or None when there is something to show"""
        if self.filtered():
            return None
        return NO_MATCHES_MESSAGE if self.query else NO_NUTRIENTS_MESSAGE
