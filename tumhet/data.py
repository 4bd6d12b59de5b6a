from collections import namedtuple

import numpy as np

from tumhet.utils import check_index, read_only_array


PosteriorSummary = namedtuple('PosteriorSummary', ['center', 'lower', 'upper', 'deciles'], defaults=(None,))


class ModeledSegment(namedtuple(
        'ModeledSegment',
        ['contig', 'start', 'end', 'segment_mean_posterior_summary', 'minor_allele_fraction_posterior_summary'])):
    """ Segment with posterior summaries from upstream segment modelling.

    Coordinates are 1-based and inclusive. The posterior summaries are only consumed by the likelihood.
    """

    __slots__ = ()

    def __new__(
            cls,
            contig,
            start,
            end,
            segment_mean_posterior_summary=None,
            minor_allele_fraction_posterior_summary=None):

        if int(start) != start or int(end) != end:
            raise ValueError('Segment coordinates must be integers.')

        if start < 1 or end < start:
            raise ValueError('Invalid segment {}:{}-{}.'.format(contig, start, end))

        return super(ModeledSegment, cls).__new__(
            cls,
            contig,
            int(start),
            int(end),
            segment_mean_posterior_summary,
            minor_allele_fraction_posterior_summary
        )

    @property
    def length(self):
        return self.end - self.start + 1


class TumorHeterogeneityData(object):
    """ Ordered, read-only collection of modelled segments.
    """

    def __init__(self, segments):
        self._segments = tuple(segments)

        if len(self._segments) == 0:
            raise ValueError('Data must contain at least one segment.')

        if not all(isinstance(x, ModeledSegment) for x in self._segments):
            raise ValueError('Data must be a sequence of ModeledSegment.')

        # Python integers keep the total exact however long the genome is
        self._lengths = tuple(x.length for x in self._segments)

        self._total_length = sum(self._lengths)

        self._fractional_lengths = read_only_array(
            np.array([x / self._total_length for x in self._lengths], dtype=np.float64)
        )

    def __getitem__(self, idx):
        check_index(idx, self.num_segments, 'Segment index')

        return self._segments[idx]

    def __iter__(self):
        return iter(self._segments)

    def __len__(self):
        return len(self._segments)

    @property
    def fractional_lengths(self):
        """ Length of each segment divided by the total length of all segments.
        """
        return self._fractional_lengths

    @property
    def num_segments(self):
        return len(self._segments)

    @property
    def segments(self):
        return self._segments

    @property
    def total_length(self):
        return self._total_length

    def calculate_fractional_length(self, segment_idx):
        check_index(segment_idx, self.num_segments, 'Segment index')

        return self._lengths[segment_idx] / self._total_length

    def get_length(self, segment_idx):
        check_index(segment_idx, self.num_segments, 'Segment index')

        return self._lengths[segment_idx]
