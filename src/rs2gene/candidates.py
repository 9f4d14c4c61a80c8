""" Retention of the nearest genes found for one side of a marker.

"""

"""
BSD 3-Clause License

Copyright (c) 2019, Andrew Riha
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived from
   this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

"""

from typing import Iterator, List, NamedTuple, Optional

from rs2gene.constants import MINIMUM_DISTANCE_MODE


class GeneDistanceCandidate(NamedTuple):
    """ Distance from a marker to one end of a gene. """

    gene_id: int
    gene_name: str
    distance: int


class MinimumDistancePolicy:
    """ Keep only the candidates tied for the smallest distance. """

    def admit(self, candidates: List[GeneDistanceCandidate], candidate):
        if candidates:
            nearest = candidates[0].distance
            if candidate.distance > nearest:
                return
            if candidate.distance < nearest:
                candidates.clear()

        candidates.append(candidate)

    def __repr__(self):
        return "MinimumDistancePolicy()"


class ThresholdPolicy:
    """ Keep every candidate within a fixed distance. """

    def __init__(self, threshold: int):
        if threshold < 0:
            raise ValueError(f"threshold must not be negative: {threshold}")
        self.threshold = threshold

    def admit(self, candidates: List[GeneDistanceCandidate], candidate):
        if candidate.distance <= self.threshold:
            candidates.append(candidate)

    def __repr__(self):
        return f"ThresholdPolicy(threshold={self.threshold})"


def retention_policy(threshold=MINIMUM_DISTANCE_MODE):
    """ Get the retention policy for a distance threshold.

    Parameters
    ----------
    threshold : int
        keep candidates within this distance; if negative, keep only the
        nearest candidates

    Returns
    -------
    MinimumDistancePolicy or ThresholdPolicy
    """
    if threshold < 0:
        return MinimumDistancePolicy()
    return ThresholdPolicy(threshold)


class DistanceCandidateSet:
    """ Genes retained for one side (5' or 3') of a marker.

    The set is reused across markers: call `remove_all` before each marker.
    """

    def __init__(self, policy=None):
        """ Initialize a `DistanceCandidateSet`.

        Parameters
        ----------
        policy : MinimumDistancePolicy or ThresholdPolicy
            decides which pushed candidates are retained; defaults to keeping
            the nearest candidates
        """
        self._policy = policy if policy is not None else MinimumDistancePolicy()
        self._candidates: List[GeneDistanceCandidate] = []

    def __len__(self):
        return len(self._candidates)

    def __iter__(self) -> Iterator[GeneDistanceCandidate]:
        return iter(self._candidates)

    def __repr__(self):
        return f"DistanceCandidateSet({self._candidates!r})"

    @property
    def policy(self):
        return self._policy

    @property
    def distance(self) -> Optional[int]:
        """ Distance of the first retained candidate.

        In minimum mode this is the distance shared by all retained
        candidates.

        Returns
        -------
        int
            distance, else None if no candidates are retained
        """
        if not self._candidates:
            return None
        return self._candidates[0].distance

    def push(self, candidate: GeneDistanceCandidate):
        self._policy.admit(self._candidates, candidate)

    def remove_all(self):
        self._candidates.clear()

    def pop(self) -> Optional[GeneDistanceCandidate]:
        """ Remove and return the most recently retained candidate.

        Returns
        -------
        GeneDistanceCandidate
            candidate, else None if the set is empty
        """
        if not self._candidates:
            return None
        return self._candidates.pop()

    def drain(self) -> Iterator[GeneDistanceCandidate]:
        """ Pop candidates until the set is empty. """
        candidate = self.pop()
        while candidate is not None:
            yield candidate
            candidate = self.pop()

    def contains_gene(self, gene_id: int) -> bool:
        return any(c.gene_id == gene_id for c in self._candidates)
