from ..evaluation import Evaluation
from ..exceptions import IncompatibleSearchListenerError
from ..validation import Validation


class SearchListener:
    """
    Listener notified of events of a search. All callbacks do nothing by default, so
    subclasses only override the events they care about.
    """

    def search_started(self, search):
        pass

    def search_stopped(self, search):
        pass

    def new_best_solution(self, search, new_best_solution, evaluation: Evaluation, validation: Validation):
        pass


class LocalSearchListener(SearchListener):
    """Listener for local searches, which are additionally notified when the current solution changes."""

    def check_compatible(self, search):
        from .abc_search import LocalSearch
        if not isinstance(search, LocalSearch):
            raise IncompatibleSearchListenerError(
                f"{self.__class__.__name__} can only listen to local searches, got {search.__class__.__name__}."
            )

    def modified_current_solution(self, search, new_current_solution, evaluation: Evaluation, validation: Validation):
        """Fired exactly once for every modification of the current solution of a local search."""
        self.check_compatible(search)
