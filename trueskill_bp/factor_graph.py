#!/usr/bin/env python3
"""
Factor graph store for Gaussian belief propagation.

Variables and factors are nodes of a networkx graph. Variable nodes are keyed
by their unique name and carry the current marginal and the prior; factor
nodes are keyed by the Factor object itself, so a factor's name is only a
label. Each factor-variable edge carries the message the factor last sent to
that variable. Factors hold Variable/Message handles (graph + key), never the
belief values themselves, and updates replace the stored values rather than
mutating them.
"""

import logging
import threading
import networkx as nx
from contextlib import ExitStack
from typing import List, Optional

from .gaussian_distribution import GaussianDistribution
from .exceptions import InvalidBindingError

logger = logging.getLogger(__name__)

VARIABLE = 'variable'
FACTOR = 'factor'


class Variable:
    """Handle to a variable node of a FactorGraph."""

    def __init__(self, factor_graph: 'FactorGraph', name: str):
        self.factor_graph = factor_graph
        self.name = name

    @property
    def _node(self) -> dict:
        return self.factor_graph.graph.nodes[self.name]

    @property
    def value(self) -> GaussianDistribution:
        return self._node['value']

    @value.setter
    def value(self, new_value: GaussianDistribution):
        self._node['value'] = new_value

    @property
    def prior(self) -> GaussianDistribution:
        return self._node['prior']

    @property
    def lock(self) -> threading.RLock:
        return self._node['lock']

    def reset_to_prior(self):
        self.value = self.prior

    def is_bound(self) -> bool:
        graph = self.factor_graph.graph
        return self.name in graph and graph.nodes[self.name].get('kind') == VARIABLE

    def __eq__(self, other):
        return (isinstance(other, Variable) and other.factor_graph is self.factor_graph
                and other.name == self.name)

    def __hash__(self):
        return hash((id(self.factor_graph), self.name))

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Variable({self.name!r})"


class Message:
    """Handle to the message a factor sends along one edge."""

    def __init__(self, factor_graph: 'FactorGraph', factor: 'Factor', variable_name: str):
        self.factor_graph = factor_graph
        self.factor = factor
        self.variable_name = variable_name

    @property
    def value(self) -> GaussianDistribution:
        return self.factor_graph.graph.edges[self.factor, self.variable_name]['message']

    @value.setter
    def value(self, new_value: GaussianDistribution):
        self.factor_graph.graph.edges[self.factor, self.variable_name]['message'] = new_value

    def __str__(self):
        return f"message from {self.factor} to {self.variable_name}"

    def __repr__(self):
        return f"Message({self.factor.name!r} -> {self.variable_name!r})"


class Factor:
    """
    Base class for factor nodes.

    A factor keeps an ordered list of (message, variable) bindings. Subclasses
    implement _update_message and may override _send_message and
    log_normalization.
    """

    def __init__(self, name: str):
        # Display label only; the graph keys factor nodes by identity
        self.name = name
        self._messages: List[Message] = []
        self._variables: List[Variable] = []
        self.factor_graph: Optional['FactorGraph'] = None

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables)

    @property
    def number_of_messages(self) -> int:
        return len(self._messages)

    @property
    def log_normalization(self) -> float:
        return 0.0

    def update_message(self, message_index: int) -> float:
        """
        Recompute the message at message_index and the marginal it feeds.

        The bound variable's lock is held for the whole read-compute-write cycle.

        Returns:
            Distance between the new and old marginal
        """
        message, variable = self._binding(message_index)
        with variable.lock:
            return self._update_message(message, variable)

    def _update_message(self, message: Message, variable: Variable) -> float:
        raise NotImplementedError(f"{type(self).__name__} does not support update_message")

    def send_message(self, message_index: int) -> float:
        message, variable = self._binding(message_index)
        with variable.lock:
            return self._send_message(message, variable)

    def _send_message(self, message: Message, variable: Variable) -> float:
        raise NotImplementedError(f"{type(self).__name__} does not support send_message")

    def _binding(self, message_index: int):
        if not 0 <= message_index < len(self._messages):
            raise IndexError(f"{self} has no message {message_index}")
        return self._messages[message_index], self._variables[message_index]

    def create_variable_to_message_binding_with_message(
        self, variable: Variable, initial_message: GaussianDistribution
    ) -> Message:
        """
        Attach this factor to a variable with the given starting message.

        Raises:
            InvalidBindingError: variable is not a live variable of a FactorGraph,
                or belongs to a different graph than earlier bindings
        """
        if not isinstance(variable, Variable) or not variable.is_bound():
            raise InvalidBindingError(f"{self} cannot bind to {variable!r}")
        if self.factor_graph is None:
            variable.factor_graph.add_factor(self)
        elif self.factor_graph is not variable.factor_graph:
            raise InvalidBindingError(f"{self} is already bound to a different graph")

        message = self.factor_graph.bind(self, variable, initial_message)
        self._messages.append(message)
        self._variables.append(variable)
        logger.debug("Bound %s", message)
        return message

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class FactorGraph:
    """Arena owning every variable belief and factor message of one graph."""

    def __init__(self):
        self.graph = nx.Graph()
        self._factors: List[Factor] = []

    def add_variable(self, name: str, prior: Optional[GaussianDistribution] = None) -> Variable:
        """
        Add a variable node.

        Args:
            name: Unique node name
            prior: Value the variable resets to (flat if omitted)

        Returns:
            Handle to the new variable, initialised to its prior
        """
        if name in self.graph:
            raise ValueError(f"Node {name!r} already exists")
        if prior is None:
            prior = GaussianDistribution.flat()
        self.graph.add_node(name, kind=VARIABLE, value=prior, prior=prior,
                            lock=threading.RLock())
        return Variable(self, name)

    def variable(self, name: str) -> Variable:
        if self.graph.nodes.get(name, {}).get('kind') != VARIABLE:
            raise KeyError(f"No variable named {name!r}")
        return Variable(self, name)

    def variables(self) -> List[Variable]:
        return [Variable(self, name) for name, kind in self.graph.nodes(data='kind')
                if kind == VARIABLE]

    def factors(self) -> List[Factor]:
        return list(self._factors)

    def add_factor(self, factor: Factor):
        if factor in self.graph:
            raise ValueError(f"{factor!r} is already in this graph")
        self.graph.add_node(factor, kind=FACTOR)
        self._factors.append(factor)
        factor.factor_graph = self

    def bind(self, factor: Factor, variable: Variable, initial_message: GaussianDistribution) -> Message:
        if self.graph.has_edge(factor, variable.name):
            raise InvalidBindingError(f"{factor} is already bound to {variable}")
        self.graph.add_edge(factor, variable.name, message=initial_message)
        return Message(self, factor, variable.name)

    def reset_marginals(self):
        for variable in self.variables():
            variable.reset_to_prior()

    def log_normalization(self) -> float:
        """
        Log evidence of the whole graph.

        Marginals are reset, every factor message is sent once, and the log
        normalisers of those products are added to each factor's own
        log_normalization. Variable marginals are left holding the products.

        Every variable lock is held for the whole computation, so concurrent
        update_message calls wait until it finishes.
        """
        with ExitStack() as stack:
            for variable in sorted(self.variables(), key=lambda v: v.name):
                stack.enter_context(variable.lock)

            self.reset_marginals()

            sum_log_z = 0.0
            for factor in self._factors:
                for index in range(factor.number_of_messages):
                    sum_log_z += factor.send_message(index)

            sum_log_s = sum(factor.log_normalization for factor in self._factors)
        return sum_log_z + sum_log_s
