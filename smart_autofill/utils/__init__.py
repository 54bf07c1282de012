# helpers around the engine: config, logging, file loading, persistence
