#!/usr/bin/env python3
#
# Copyright (C) 2026 Intel Corporation.
#
# SPDX-License-Identifier: BSD-3-Clause
#

from tqdm import tqdm

class PipelineObject:
    def __init__(self, **kwargs):
        self.data = {}
        for k,v in kwargs.items():
            self.set(k, v)

    def set(self, tag, data):
        self.data[tag] = data

    def get(self, tag):
        return self.data[tag]

    def has(self, tag):
        return tag in self.data.keys()

    def consume(self, tag):
        return self.data.pop(tag, None)

def as_set(tags):
    return tags if isinstance(tags, set) else {tags}

class PipelineStage:
    # The following three class variables defines the inputs and outputs of the stage. Each of them can be either a set
    # or a string (which is interpreted as a unit set)

    consumes = set()        # Data consumed by this stage. Consumed data will be unavailable to later stages.
    uses = set()            # Data used but not consumed by this stage.
    provides = set()        # Data provided by this stage.

    description = None      # Shown next to the progress bar while the stage runs.

    def run(self, obj):
        raise NotImplementedError

class PipelineEngine:
    def __init__(self, initial_data = [], progress = None):
        self.stages = []
        self.initial_data = set(initial_data)
        self.available_data = set(initial_data)
        # None lets tqdm hide the bar when the output is not a terminal
        self.progress_disabled = None if progress is None else not progress

    def add_stage(self, stage):
        consumes = as_set(stage.consumes)
        uses = as_set(stage.uses)
        provides = as_set(stage.provides)

        all_uses = consumes.union(uses)
        if not all_uses.issubset(self.available_data):
            raise ValueError(f"Data {all_uses - self.available_data} need by stage {stage.__class__.__name__} but not provided by the pipeline")

        self.stages.append(stage)
        self.available_data = self.available_data.difference(consumes).union(provides)

    def add_stages(self, stages):
        for stage in stages:
            self.add_stage(stage)

    def run(self, obj):
        for tag in self.initial_data:
            if not obj.has(tag):
                raise AttributeError(f"Data {tag} is needed by the pipeline but not provided by the object")

        with tqdm(total=len(self.stages), disable=self.progress_disabled, leave=False) as pbar:
            for stage in self.stages:
                if stage.description:
                    pbar.set_description(stage.description)
                stage.run(obj)

                for tag in as_set(stage.consumes):
                    obj.consume(tag)
                pbar.update(1)
